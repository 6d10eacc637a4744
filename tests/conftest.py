from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client():
    """TestClient with the shutdown hook mocked out."""
    with patch(
        "app.main.close_http_client",
        new_callable=AsyncMock,
    ):
        with TestClient(app) as c:
            yield c


@pytest.fixture
def soup():
    """Factory turning an HTML string into a parsed document."""

    def _parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "lxml")

    return _parse
