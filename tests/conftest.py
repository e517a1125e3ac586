import httpx
import pytest

from wallet_explorer.cache import TTLCache
from wallet_explorer.providers import base


@pytest.fixture(autouse=True)
def fresh_cache(monkeypatch):
    """Each test gets its own upstream response cache."""
    cache = TTLCache(default_ttl=60, max_size=100)
    monkeypatch.setattr(base, "cache", cache)
    return cache


@pytest.fixture
def upstream(monkeypatch):
    """Route every provider request to ``handler`` and record it.

    Usage: ``calls = upstream(handler)`` where ``handler(request)`` returns an
    ``httpx.Response``.
    """
    real_client = httpx.AsyncClient

    def install(handler):
        calls = []

        def recording(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        monkeypatch.setattr(
            base.httpx,
            "AsyncClient",
            lambda *args, **kwargs: real_client(transport=transport),
        )
        return calls

    return install
