from typing import Optional

import pytest
from fastapi.testclient import TestClient

from bookmark_manager_api.app.main import create_app
from bookmark_manager_api.app.services.bookmark_service import BookmarkService


class FakeTitleFetcher:
    """Stands in for the network title fetch and records the URLs asked for."""

    def __init__(self, title: Optional[str] = None) -> None:
        self.title = title
        self.calls = []

    async def __call__(self, url: str) -> Optional[str]:
        self.calls.append(url)
        return self.title


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "bookmarks.json"


@pytest.fixture
def title_fetcher() -> FakeTitleFetcher:
    return FakeTitleFetcher()


@pytest.fixture
def service(data_file, title_fetcher) -> BookmarkService:
    return BookmarkService(str(data_file), title_fetcher=title_fetcher)


@pytest.fixture
def client(service):
    app = create_app(service)
    with TestClient(app) as test_client:
        yield test_client
