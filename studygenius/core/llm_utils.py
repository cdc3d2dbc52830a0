"""
Shared LLM utilities for reading chat model responses.

Handles the response shapes of the supported providers (Gemini returns
content block lists, OpenAI/Ollama return strings) and the structured
function-call payloads produced by ``bind_tools``.
"""
from typing import Any, Dict, Optional, Union


def extract_content_as_string(response) -> str:
    """
    Safely extract content from LLM response as a string.

    Handles cases where response.content might be:
    - A string (most common)
    - A list of content blocks (e.g., Gemini returns [{'type': 'text', 'text': '...'}])
    - A dict content block
    - A response object with .content attribute

    Args:
        response: LLM response object or content

    Returns:
        Content as a plain string
    """
    if hasattr(response, 'content'):
        content = response.content
    else:
        content = response

    return normalize_content_to_string(content)


def normalize_content_to_string(content) -> str:
    """
    Normalize any content type to a plain string.

    Args:
        content: Content that may be string, list, or dict

    Returns:
        Plain string content
    """
    if isinstance(content, str):
        return content
    elif isinstance(content, list):
        text_parts = []
        for item in content:
            if isinstance(item, dict):
                if 'text' in item:
                    text_parts.append(item['text'])
                elif 'content' in item:
                    text_parts.append(item['content'])
                # Non-text blocks (tool_use, images) carry no body text
            elif isinstance(item, str):
                text_parts.append(item)
            elif item is not None:
                text_parts.append(str(item))
        return " ".join(text_parts)
    elif isinstance(content, dict):
        if 'text' in content:
            return content['text']
        elif 'content' in content:
            return content['content']
        else:
            return str(content)
    else:
        return str(content) if content else ""


def get_structured_call_arguments(
    response,
    name: Optional[str] = None
) -> Optional[Union[Dict[str, Any], str]]:
    """
    Return the arguments of the first structured (tool) call in a response.

    Well-formed calls come back from LangChain already parsed into a dict.
    When the provider returned arguments that are not valid JSON, LangChain
    moves the call to ``invalid_tool_calls`` and keeps the raw argument
    string; that string is returned so it can go through JSON repair.

    Args:
        response: AIMessage returned by a tool-bound chat model
        name: Only consider calls to this function (any call if None)

    Returns:
        Parsed argument dict, raw argument string, or None when the model
        made no structured call
    """
    for call in getattr(response, "tool_calls", None) or []:
        if name is None or call.get("name") == name:
            return call.get("args")

    for call in getattr(response, "invalid_tool_calls", None) or []:
        if name is None or call.get("name") in (name, None):
            args = call.get("args")
            if args:
                return args

    return None
