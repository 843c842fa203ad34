"""Tests for render contexts and settings."""

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from jsonapi_views import DocumentAssembler, RenderContext, Settings, get_settings

from conftest import make_post


class TestRenderContext:

    def test_origin(self):
        assert RenderContext(scheme="https", host="api.test").origin == "https://api.test"
        assert RenderContext(host="api.test").origin == "http://api.test"
        assert RenderContext().origin == ""

    def test_overrides_win(self):
        context = RenderContext(scheme="http", host="example.com")
        settings = Settings(_env_file=None, host="www.otherhost.com", scheme="ftp")

        resolved = context.with_overrides(settings)

        assert resolved.origin == "ftp://www.otherhost.com"
        assert context.origin == "http://example.com"

    def test_namespace_filled_from_settings(self):
        settings = Settings(_env_file=None, namespace="/v1")

        assert RenderContext().with_overrides(settings).namespace == "/v1"
        assert RenderContext(namespace="/v2").with_overrides(settings).namespace == "/v2"

    def test_from_request(self, post_view, settings):
        app = FastAPI()

        @app.get("/api/posts/{post_id}")
        def show_post(post_id: int, request: Request):
            context = RenderContext.from_request(request, user="ada")
            assert context.state == {"user": "ada"}
            return DocumentAssembler(settings).render_one(post_view, make_post(post_id), context)

        response = TestClient(app).get("/api/posts/3")

        assert response.status_code == 200
        body = response.json()
        assert body["links"] == {"self": "http://testserver/api/posts/3"}
        assert body["data"]["relationships"]["author"] == {
            "data": None,
            "links": {
                "self": "http://testserver/api/posts/3/relationships/author",
                "related": "http://testserver/users",
            },
        }


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("HOST", "SCHEME", "NAMESPACE", "FIELD_TRANSFORMATION", "REMOVE_LINKS"):
            monkeypatch.delenv(f"JSONAPI_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.host is None
        assert settings.scheme is None
        assert settings.namespace == ""
        assert settings.field_transformation is None
        assert settings.remove_links is False

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("JSONAPI_HOST", "env.example.com")
        monkeypatch.setenv("JSONAPI_FIELD_TRANSFORMATION", "dasherize")

        settings = Settings(_env_file=None)

        assert settings.host == "env.example.com"
        assert settings.field_transformation == "dasherize"

    def test_get_settings_is_cached(self, monkeypatch):
        get_settings.cache_clear()
        monkeypatch.setenv("JSONAPI_NAMESPACE", "/cached")
        try:
            assert get_settings() is get_settings()
            assert get_settings().namespace == "/cached"
        finally:
            get_settings.cache_clear()
