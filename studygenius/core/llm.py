from langchain_core.language_models import BaseChatModel


def create_llm(config) -> BaseChatModel:
    """Create LLM instance based on configured provider."""
    provider = getattr(config, 'LLM_PROVIDER', 'google').lower()
    temperature = getattr(config, 'LLM_TEMPERATURE', 0.7)
    max_tokens = getattr(config, 'LLM_MAX_TOKENS', 4000)

    if provider == 'google':
        from langchain_google_genai import ChatGoogleGenerativeAI

        api_key = getattr(config, 'GOOGLE_API_KEY', None)
        if not api_key:
            raise ValueError(
                "GOOGLE_API_KEY not set. Please set it as environment variable "
                "or in .env. Get your key from: https://aistudio.google.com/app/apikey"
            )

        model_name = getattr(config, 'LLM_MODEL', 'gemini-2.5-flash')
        print(f"✓ Using Google Gemini API: {model_name}")
        return ChatGoogleGenerativeAI(
            model=model_name,
            temperature=temperature,
            max_output_tokens=max_tokens,
            google_api_key=api_key
        )
    elif provider == 'azure':
        from langchain_openai import AzureChatOpenAI

        endpoint = getattr(config, 'AZURE_OPENAI_ENDPOINT', None)
        api_key = getattr(config, 'AZURE_OPENAI_API_KEY', None)
        if not endpoint or not api_key:
            raise ValueError(
                "AZURE_OPENAI_ENDPOINT and AZURE_OPENAI_API_KEY must be set "
                "to use the azure provider"
            )

        deployment = getattr(config, 'AZURE_OPENAI_DEPLOYMENT', 'gpt-4o')
        print(f"✓ Using Azure OpenAI deployment: {deployment}")
        return AzureChatOpenAI(
            azure_endpoint=endpoint,
            api_key=api_key,
            azure_deployment=deployment,
            api_version=getattr(config, 'AZURE_OPENAI_API_VERSION', '2025-01-01-preview'),
            temperature=temperature,
            max_tokens=max_tokens
        )
    else:
        # Default to Ollama
        from langchain_ollama import ChatOllama
        model_name = getattr(config, 'LLM_MODEL', 'qwen3:4b-instruct-2507-q4_K_M')
        print(f"✓ Using Ollama: {model_name}")
        return ChatOllama(model=model_name, temperature=temperature, num_predict=max_tokens)
