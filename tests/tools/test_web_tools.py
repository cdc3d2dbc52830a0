"""
Tests for tools/web_tools.py - Tavily web search provider
"""
import pytest
from unittest.mock import MagicMock, patch

from studygenius.tools.web_tools import TavilySearchProvider


class TestTavilySearchProvider:
    """Test TavilySearchProvider class"""

    def test_is_available_without_api_key(self, mock_config):
        """Test availability without API key"""
        provider = TavilySearchProvider(mock_config)
        assert provider.is_available() is False

    def test_search_without_api_key(self, mock_config):
        """Test that searching without a key raises"""
        provider = TavilySearchProvider(mock_config)
        with pytest.raises(RuntimeError, match="TAVILY_API_KEY"):
            provider.search("learn rust")

    def test_is_available_with_api_key(self, mock_config):
        """Test availability with API key"""
        mock_config.TAVILY_API_KEY = "test_key"

        with patch("studygenius.tools.web_tools.TavilySearch") as mock_tavily:
            mock_tavily.return_value = MagicMock()
            provider = TavilySearchProvider(mock_config)

            assert provider.is_available() is True
            mock_tavily.assert_called_once_with(
                max_results=5, topic="general", tavily_api_key="test_key"
            )

    def test_search_results(self, mock_config):
        """Test mapping of Tavily results"""
        mock_config.TAVILY_API_KEY = "test_key"

        with patch("studygenius.tools.web_tools.TavilySearch") as mock_tavily:
            mock_tavily.return_value.invoke.return_value = {
                "query": "learn rust",
                "results": [
                    {"title": "The Rust Book", "url": "https://doc.rust-lang.org/book/",
                     "content": "x" * 800, "score": 0.9},
                    {"title": "No link", "content": "dropped"},
                    {"url": "https://rust.example.org/"},
                ]
            }
            provider = TavilySearchProvider(mock_config)
            results = provider.search("learn rust")

        assert len(results) == 2
        assert results[0].title == "The Rust Book"
        assert results[0].link == "https://doc.rust-lang.org/book/"
        assert len(results[0].snippet) == 500
        assert results[1].title == "https://rust.example.org/"
        mock_tavily.return_value.invoke.assert_called_once_with({"query": "learn rust"})

    def test_search_list_response(self, mock_config):
        """Test that a bare result list is accepted"""
        mock_config.TAVILY_API_KEY = "test_key"

        with patch("studygenius.tools.web_tools.TavilySearch") as mock_tavily:
            mock_tavily.return_value.invoke.return_value = [
                {"title": "A", "url": "https://a.example.com", "content": "a"}
            ]
            results = TavilySearchProvider(mock_config).search("a")

        assert [r.link for r in results] == ["https://a.example.com"]

    def test_search_error_response(self, mock_config):
        """Test that an error payload raises"""
        mock_config.TAVILY_API_KEY = "test_key"

        with patch("studygenius.tools.web_tools.TavilySearch") as mock_tavily:
            mock_tavily.return_value.invoke.return_value = {"error": "invalid api key"}
            provider = TavilySearchProvider(mock_config)

            with pytest.raises(RuntimeError, match="invalid api key"):
                provider.search("a")
