"""
Shared fixtures for the Law Proxy tests.

The upstream is always replaced by `httpx.MockTransport`; no test talks
to law.go.kr.
"""

import httpx
import pytest

from lawproxy.config import Settings, get_settings


TEST_OC = "test-oc-key"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values = {"oc": TEST_OC}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def text_response(body: str, content_type: str = "text/plain;charset=UTF-8", status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=body.encode("utf-8"), headers={"content-type": content_type})


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
