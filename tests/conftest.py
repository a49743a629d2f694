"""
Pytest configuration and shared fixtures for tests.
"""
import pytest
from fastapi.testclient import TestClient

from ranker.main import create_app


@pytest.fixture
def app():
    """Create a FastAPI app instance for testing."""
    return create_app()


@pytest.fixture
def client(app):
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def mock_settings():
    """Settings for testing."""
    from ranker.config import Settings

    return Settings(
        environment="test",
        lowercase_query=False,
        max_results_per_request=5,
        include_scores=True,
    )


@pytest.fixture
def wikipedia_result():
    """Raw result triple for the Wikipedia URL article."""
    return (
        "https://en.wikipedia.org/wiki/URL",
        "URL",
        "A URL is a reference to a web resource that specifies its location "
        "on a computer network and a mechanism for retrieving it.",
    )


@pytest.fixture
def sample_results(wikipedia_result):
    """Raw result triples where only the second one is about URLs."""
    return [
        (
            "https://example.com/blog/2023/05/some-long-article-about-other-things",
            "Gardening tips for spring",
            "Plant tomatoes after the last frost.",
        ),
        wikipedia_result,
        (
            "https://docs.python.org/3/library/urllib.parse.html",
            "urllib.parse - Parse URLs into components",
            "This module defines a standard interface to break URL strings up in components.",
        ),
    ]
