"""
Web search providers used to find supplementary learning resources.
"""

from .base import BaseSearchProvider, SearchResult
from .web_tools import TavilySearchProvider

__all__ = ["BaseSearchProvider", "SearchResult", "TavilySearchProvider"]
