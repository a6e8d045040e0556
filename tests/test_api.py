"""
Tests for the HTTP surface.

Drives the FastAPI app end to end with the upstream replaced by
`httpx.MockTransport`.

Run with: pytest tests/test_api.py -v
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from lawproxy.server.main import create_app

from conftest import TEST_OC, text_response


class Upstream:
    """Records upstream requests and replies with a canned response."""

    def __init__(self, response=None):
        self.response = response or text_response("{}", "application/json")
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        if callable(self.response):
            return self.response(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def client(settings, upstream):
    app = create_app(settings, transport=httpx.MockTransport(upstream))
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:

    def test_health(self, client, upstream):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "oc": "set", "version": "1.0.0"}
        assert upstream.requests == []


class TestRouting:
    """Each route reaches the right upstream endpoint and target."""

    @pytest.mark.parametrize("path,target", [
        ("/api/law/search", "law"),
        ("/api/precedent/search", "prec"),
        ("/api/interpretation/search", "expc"),
    ])
    def test_search_routes(self, client, upstream, path, target):
        response = client.get(path, params={"query": "근로기준법", "page": "2"})

        assert response.status_code == 200
        assert upstream.last.url.path == "/DRF/lawSearch.do"
        params = upstream.last.url.params
        assert params["target"] == target
        assert params["query"] == "근로기준법"
        assert params["page"] == "2"
        assert params["display"] == "100"

    @pytest.mark.parametrize("path,target", [
        ("/api/law/001706", "law"),
        ("/api/precedent/228541", "prec"),
        ("/api/interpretation/313107", "expc"),
    ])
    def test_detail_routes(self, client, upstream, path, target):
        response = client.get(path)

        assert response.status_code == 200
        assert upstream.last.url.path == "/DRF/lawService.do"
        assert upstream.last.url.params["target"] == target
        assert upstream.last.url.params["ID"] == path.rsplit("/", 1)[1]

    def test_search_not_captured_as_id(self, client, upstream):
        client.get("/api/law/search", params={"query": "민법"})

        assert "ID" not in upstream.last.url.params

    def test_precedent_search_sends_org(self, client, upstream):
        client.get("/api/precedent/search", params={"query": "q"})

        assert upstream.last.url.params["org"] == "400201"

    def test_missing_query_forwarded_as_missing(self, client, upstream):
        response = client.get("/api/interpretation/search")

        assert response.status_code == 200
        assert "query" not in upstream.last.url.params

    def test_query_encoded_once(self, client, upstream):
        client.get("/api/law/search", params={"query": "민법"})

        assert upstream.last.url.params["query"] == "민법"
        assert b"%25" not in upstream.last.url.query


class TestOutcomes:
    """Upstream body shapes mapped to HTTP responses."""

    def test_payload_relayed_as_is(self, client, upstream):
        payload = {"LawSearch": {"totalCnt": 3, "law": [{"법령명한글": "민법"}]}}
        upstream.response = text_response(json.dumps(payload, ensure_ascii=False), "application/json")

        response = client.get("/api/law/search", params={"query": "민법"})

        assert response.status_code == 200
        assert response.json() == payload

    def test_string_encoded_json(self, client, upstream):
        upstream.response = text_response('{"LawSearch":{"totalCnt":3}}')

        response = client.get("/api/law/search", params={"query": "민법"})

        assert response.status_code == 200
        assert response.json() == {"LawSearch": {"totalCnt": 3}}

    def test_json_wrapped_in_json_string(self, client, upstream):
        upstream.response = text_response(json.dumps('{"PrecSearch":{"totalCnt":1}}'), "application/json")

        response = client.get("/api/precedent/search", params={"query": "q"})

        assert response.status_code == 200
        assert response.json() == {"PrecSearch": {"totalCnt": 1}}

    def test_auth_sentence_is_401(self, client, upstream):
        upstream.response = text_response("사용자인증에 실패하였습니다")

        response = client.get("/api/law/search", params={"query": "민법"})

        assert response.status_code == 401
        body = response.json()
        assert body["error"] == "API Authentication failed"
        assert body["reason"] == "credential_rejected"
        assert body["oc_key"] == "present"
        assert TEST_OC not in response.text

    def test_html_is_401_with_excerpt(self, client, upstream):
        page = "<!DOCTYPE html><html>" + "<p>차단</p>" * 100 + "</html>"
        upstream.response = text_response(page, "text/html")

        response = client.get("/api/law/001706")

        assert response.status_code == 401
        body = response.json()
        assert body["reason"] == "possible_ip_restriction"
        assert len(body["details"]) <= 200
        assert page.startswith(body["details"])

    def test_not_json_is_500(self, client, upstream):
        upstream.response = text_response("not json at all")

        response = client.get("/api/interpretation/313107")

        assert response.status_code == 500
        body = response.json()
        assert body["details"] == "not json at all"
        assert body["reason"] == "invalid_format"
        assert body["oc_key"] == "present"

    def test_transport_failure_is_500(self, client, upstream):
        upstream.response = httpx.ConnectError("connection refused")

        response = client.get("/api/precedent/228541")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert body["reason"] == "transport_error"
        assert body["attempts"] == 2
        assert "connection refused" in body["message"]
        assert len(upstream.requests) == 2

    def test_upstream_error_status_is_500(self, client, upstream):
        upstream.response = text_response("gateway down", status_code=502)

        response = client.get("/api/law/search", params={"query": "q"})

        assert response.status_code == 500
        body = response.json()
        assert body["upstream_status"] == 502
        assert body["details"] == "gateway down"
        assert len(upstream.requests) == 1

    def test_redirect_loop_is_json_500(self, client, upstream):
        upstream.response = lambda request: httpx.Response(302, headers={"location": str(request.url)})

        response = client.get("/api/law/search", params={"query": "민법"})

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert body["reason"] == "transport_error"
        assert body["oc_key"] == "present"
        assert "TooManyRedirects" in body["message"]

    def test_bad_content_encoding_is_json_500(self, client, upstream):
        upstream.response = httpx.Response(200, stream=httpx.ByteStream(b"not gzip"), headers={"content-encoding": "gzip"})

        response = client.get("/api/law/1")

        assert response.status_code == 500
        body = response.json()
        assert body["reason"] == "transport_error"
        assert body["oc_key"] == "present"
        assert len(upstream.requests) == 1

    def test_json_with_leading_bom(self, client, upstream):
        upstream.response = text_response('\ufeff{"LawSearch":{"totalCnt":3}}', "application/json;charset=UTF-8")

        response = client.get("/api/law/search", params={"query": "민법"})

        assert response.status_code == 200
        assert response.json() == {"LawSearch": {"totalCnt": 3}}
