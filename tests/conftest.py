from __future__ import annotations

import io
from typing import Dict, List, Tuple, Union

import pytest
import requests

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def make_response(
    url: str,
    status: int = 200,
    body: bytes = PNG_BYTES,
    content_type: str = "image/png",
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.reason = "OK" if status < 400 else "Not Found"
    response.raw = io.BytesIO(body)
    response.headers["Content-Type"] = content_type
    return response


class FakeSession:
    """Stand-in for requests.Session that serves canned responses."""

    def __init__(self) -> None:
        self.routes: Dict[str, Union[Tuple[int, bytes, str], Exception]] = {}
        self.calls: List[Tuple[str, dict]] = []
        self.responses: List[requests.Response] = []

    def add(
        self,
        url: str,
        status: int = 200,
        body: bytes = PNG_BYTES,
        content_type: str = "image/png",
    ) -> None:
        self.routes[url] = (status, body, content_type)

    def fail(self, url: str, exc: Exception) -> None:
        self.routes[url] = exc

    def get(self, url: str, **kwargs) -> requests.Response:
        self.calls.append((url, kwargs))
        route = self.routes.get(url, (404, b"", "text/plain"))
        if isinstance(route, Exception):
            raise route
        status, body, content_type = route
        response = make_response(url, status, body, content_type)
        self.responses.append(response)
        return response

    def close(self) -> None:
        pass


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES
