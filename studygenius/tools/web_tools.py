from typing import Any, Dict, List
from langchain_tavily import TavilySearch
from .base import BaseSearchProvider, SearchResult
import logging

logger = logging.getLogger(__name__)


class TavilySearchProvider(BaseSearchProvider):
    """
    Web search through the Tavily API.

    Returns organic results as SearchResult(title, snippet, link). Errors
    propagate to the caller, which decides whether a failed query matters.
    """

    def __init__(self, config):
        self.config = config
        self.tavily_api_key = getattr(config, 'TAVILY_API_KEY', None)
        self.max_results = getattr(config, 'MAX_WEB_RESULTS', 5)
        self._tavily = None

        if self.tavily_api_key:
            self._tavily = TavilySearch(
                max_results=self.max_results,
                topic="general",
                tavily_api_key=self.tavily_api_key
            )

    def is_available(self) -> bool:
        """Search is available once a Tavily API key is configured."""
        return self._tavily is not None

    def search(self, query: str) -> List[SearchResult]:
        """
        Search the web for learning material.

        Args:
            query: Search query

        Returns:
            List of search results with titles, links and snippets
        """
        if not self._tavily:
            raise RuntimeError("Web search API not configured. Set TAVILY_API_KEY")

        response = self._tavily.invoke({"query": query})
        raw_results = self._unwrap_results(response)

        results = []
        for r in raw_results[:self.max_results]:
            link = r.get("url") or r.get("link")
            if not link:
                continue
            results.append(SearchResult(
                title=r.get("title") or link,
                snippet=(r.get("content") or r.get("snippet") or "")[:500],  # Limit snippet length
                link=link
            ))

        logger.debug(f"Web search '{query}' returned {len(results)} results")
        return results

    @staticmethod
    def _unwrap_results(response: Any) -> List[Dict[str, Any]]:
        """TavilySearch returns {"results": [...]}; older tools returned the list itself."""
        if isinstance(response, dict):
            if response.get("error"):
                raise RuntimeError(f"Web search failed: {response['error']}")
            return response.get("results", [])
        if isinstance(response, list):
            return [r for r in response if isinstance(r, dict)]
        return []
