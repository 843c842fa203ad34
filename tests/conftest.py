"""Shared test fixtures."""

from typing import Any

import pytest

from jsonapi_views import (
    NOT_LOADED,
    DocumentAssembler,
    JSONAPIView,
    RenderContext,
    Settings,
    ViewRegistry,
    attribute,
)


# ── Views ────────────────────────────────────────────────────────────────


class UserView(JSONAPIView):
    class Meta:
        type_ = "users"
        fields = ["age", "first_name", "last_name", "full_name", "password"]
        hidden = ["password"]
        relationships = {"posts": "posts"}

    @attribute
    def full_name(self, data, context):
        return f"{data['first_name']} {data['last_name']}"


class CommentView(JSONAPIView):
    class Meta:
        type_ = "comments"
        fields = ["text"]
        relationships = {"user": ("users", "include")}


class PostView(JSONAPIView):
    class Meta:
        type_ = "posts"
        namespace = "/api"
        fields = ["title", "body"]
        relationships = {
            "author": ("users", "include"),
            "comments": ("comments", "include"),
        }

    def hidden(self, data):
        if data["title"] == "Hidden body":
            return {"body"}
        return set()


# ── Data ─────────────────────────────────────────────────────────────────


def make_user(id: int, first_name: str = "Jason", last_name: str = "S", **extra: Any) -> dict:
    user = {
        "id": id,
        "age": 30,
        "first_name": first_name,
        "last_name": last_name,
        "password": "securepw",
        "posts": NOT_LOADED,
    }
    user.update(extra)
    return user


def make_comment(id: int, text: str = "Nice", user: Any = NOT_LOADED) -> dict:
    return {"id": id, "text": text, "user": user}


def make_post(
    id: int,
    title: str = "Hello",
    body: str = "World",
    author: Any = NOT_LOADED,
    comments: Any = NOT_LOADED,
) -> dict:
    return {"id": id, "title": title, "body": body, "author": author, "comments": comments}


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def registry() -> ViewRegistry:
    registry = ViewRegistry()
    for view_cls in (UserView, CommentView, PostView):
        registry.register(view_cls)
    return registry


@pytest.fixture
def post_view(registry: ViewRegistry) -> JSONAPIView:
    return registry.get("posts")


@pytest.fixture
def user_view(registry: ViewRegistry) -> JSONAPIView:
    return registry.get("users")


@pytest.fixture
def comment_view(registry: ViewRegistry) -> JSONAPIView:
    return registry.get("comments")


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, host=None, scheme=None, namespace="")


@pytest.fixture
def assembler(settings: Settings) -> DocumentAssembler:
    return DocumentAssembler(settings)


@pytest.fixture
def context() -> RenderContext:
    return RenderContext(scheme="http", host="example.com")
