from abc import ABC, abstractmethod
from typing import List
from pydantic import BaseModel


class SearchResult(BaseModel):
    """One organic web search hit."""
    title: str
    snippet: str = ""
    link: str


class BaseSearchProvider(ABC):
    """Abstract base class for web search providers."""

    @abstractmethod
    def search(self, query: str) -> List[SearchResult]:
        """Run one search query. May raise on network or API errors."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is properly configured and available."""
        pass
