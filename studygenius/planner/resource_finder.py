"""
Supplementary learning resource search.

Queries a web search provider when one is configured and falls back to asking
the language model for suggestions. Every failure is per query: a failed
search or a malformed suggestion is logged and skipped, never raised.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlparse

from studygenius.planner.parsers import parse_model_response
from studygenius.planner.prompts import build_resource_prompt
from studygenius.planner.schemas import Resource
from studygenius.planner.study_plan_generator import PlanGenerator, clean_resources
from studygenius.tools.base import BaseSearchProvider, SearchResult

logger = logging.getLogger(__name__)

GENERIC_QUERY_TEMPLATES = (
    "learn {topic}",
    "{topic} tutorial for beginners",
    "{topic} official documentation",
    "{topic} online course",
)
MAX_SUBTOPIC_QUERIES = 3

# Stop searching once this many unique results are in hand
RESOURCE_GOOD_ENOUGH_COUNT = 5
MAX_RESOURCES = 10

# Lower sorts first; everything else keeps discovery order after these
TYPE_ORDER = {"documentation": 0, "course": 1}

COURSE_DOMAINS = (
    "coursera.org", "udemy.com", "edx.org", "khanacademy.org", "codecademy.com",
    "pluralsight.com", "skillshare.com", "brilliant.org", "ocw.mit.edu",
)
VIDEO_DOMAINS = ("youtube.com", "youtu.be", "vimeo.com")


def build_search_queries(topic: str, subtopics: Sequence[str] = ()) -> List[str]:
    """
    One query per subtopic (up to MAX_SUBTOPIC_QUERIES) plus the generic
    variants, without duplicates: 4 to 7 queries.
    """
    queries = []
    for subtopic in [s.strip() for s in subtopics if s and s.strip()][:MAX_SUBTOPIC_QUERIES]:
        queries.append(subtopic if topic.lower() in subtopic.lower() else f"{topic} {subtopic}")
    queries.extend(template.format(topic=topic) for template in GENERIC_QUERY_TEMPLATES)

    unique = {}
    for query in queries:
        unique.setdefault(query.lower(), query)
    return list(unique.values())


def infer_resource_type(url: str, title: str = "") -> str:
    """Classify a resource as documentation, course, video or article."""
    parsed = urlparse(url or "")
    host = parsed.netloc.lower()
    path = parsed.path.lower()
    title = (title or "").lower()

    if (
        host.startswith("docs.")
        or "readthedocs" in host
        or path.startswith("/docs")
        or "/documentation" in path
        or "documentation" in title
    ):
        return "documentation"
    if any(domain in host for domain in COURSE_DOMAINS) or "course" in title:
        return "course"
    if any(domain in host for domain in VIDEO_DOMAINS):
        return "video"
    return "article"


def merge_resources(existing: Iterable[Resource], new: Iterable[Resource]) -> List[Resource]:
    """
    Append ``new`` to ``existing``, dropping any resource whose exact URL was
    already seen. Resources without a URL are never treated as duplicates.
    """
    merged = list(existing)
    seen = {r.url for r in merged if r.url}
    for resource in new:
        if resource.url and resource.url in seen:
            continue
        if resource.url:
            seen.add(resource.url)
        merged.append(resource)
    return merged


def rank_resources(resources: Iterable[Resource], limit: int = MAX_RESOURCES) -> List[Resource]:
    """Documentation first, then courses, then the rest in discovery order."""
    ranked = sorted(resources, key=lambda r: TYPE_ORDER.get(r.type or "", len(TYPE_ORDER)))
    return ranked[:limit]


def search_result_to_resource(result: SearchResult, query: str) -> Resource:
    return Resource(
        title=result.title,
        description=result.snippet,
        url=result.link,
        type=infer_resource_type(result.link, result.title),
        subtopic=query
    )


class ResourceFinder:
    """Finds supplementary resources for a topic and its subtopics."""

    def __init__(
        self,
        llm=None,
        search_provider: Optional[BaseSearchProvider] = None,
        config=None
    ):
        """
        Initialize the finder.

        Args:
            llm: Chat model for suggestion fallback (None disables the fallback)
            search_provider: Web search provider (None skips web search)
            config: Configuration object
        """
        self.search_provider = search_provider
        self.generator = PlanGenerator(llm, config) if llm is not None else None
        self.search_timeout = getattr(config, 'SEARCH_TIMEOUT_SECONDS', 15)
        self.good_enough = getattr(config, 'RESOURCE_GOOD_ENOUGH_COUNT', RESOURCE_GOOD_ENOUGH_COUNT)
        self.max_resources = getattr(config, 'MAX_RESOURCES', MAX_RESOURCES)

    async def find_resources(self, topic: str, subtopics: Sequence[str] = ()) -> List[Resource]:
        """
        Find resources for a topic.

        Args:
            topic: Main topic
            subtopics: Optional subtopics, one search query each

        Returns:
            Deduplicated, ranked resources (possibly empty)
        """
        topic = (topic or "").strip()
        if not topic:
            return []

        queries = build_search_queries(topic, subtopics)
        collected: List[Resource] = []

        if self.search_provider is not None and self.search_provider.is_available():
            batches = await asyncio.gather(*(self._search(query) for query in queries))
            for batch in batches:
                collected = merge_resources(collected, batch)

            if len(collected) >= self.good_enough:
                logger.info(f"Found {len(collected)} resources for '{topic}' via web search")
                return rank_resources(collected, self.max_resources)
            logger.info(f"Web search found only {len(collected)} resources for '{topic}', asking the model")

        if self.generator is not None:
            batches = await asyncio.gather(*(self._suggest(topic, query) for query in queries))
            for batch in batches:
                collected = merge_resources(collected, batch)

        logger.info(f"Found {len(collected)} resources for '{topic}'")
        return rank_resources(collected, self.max_resources)

    async def _search(self, query: str) -> List[Resource]:
        try:
            results = await asyncio.wait_for(
                asyncio.to_thread(self.search_provider.search, query),
                timeout=self.search_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Web search for '{query}' timed out after {self.search_timeout}s")
            return []
        except Exception as e:
            logger.warning(f"Web search for '{query}' failed: {e}")
            return []

        return [search_result_to_resource(result, query) for result in results]

    async def _suggest(self, topic: str, query: str) -> List[Resource]:
        prompt = build_resource_prompt(topic, query)
        try:
            response = await self.generator.invoke_structured(prompt)
            data = parse_model_response(response, prompt.function_name)
        except Exception as e:
            logger.warning(f"Resource suggestions for '{query}' failed: {e}")
            return []

        resources = []
        for resource in clean_resources(data.get("resources")):
            resources.append(resource.model_copy(update={
                "type": resource.type or infer_resource_type(resource.url, resource.title),
                "subtopic": query,
            }))
        return resources
