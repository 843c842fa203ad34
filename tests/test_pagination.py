"""Tests for pagination link strategies."""

import pytest

from jsonapi_views import DataError
from jsonapi_views.pagination import OffsetPagination, PageNumberPagination

from conftest import make_post


def _page_query(number, size):
    return f"?page%5Bnumber%5D={number}&page%5Bsize%5D={size}"


class TestPageNumberPagination:

    def test_first_page_with_total(self, post_view):
        links = PageNumberPagination().get_links(
            post_view, [make_post(1)], None, {"number": 1, "size": 2}, total=5
        )

        assert links == {
            "first": "/api/posts" + _page_query(1, 2),
            "last": "/api/posts" + _page_query(3, 2),
            "next": "/api/posts" + _page_query(2, 2),
        }

    def test_last_page_has_no_next(self, post_view):
        links = PageNumberPagination().get_links(
            post_view, [], None, {"number": 3, "size": 2}, total=5
        )

        assert "next" not in links
        assert links["prev"] == "/api/posts" + _page_query(2, 2)

    def test_without_total_next_follows_a_full_page(self, post_view):
        paginator = PageNumberPagination()
        full = paginator.get_links(post_view, [make_post(1), make_post(2)], None, {"size": 2})
        partial = paginator.get_links(post_view, [make_post(1)], None, {"size": 2})

        assert full["next"] == "/api/posts" + _page_query(2, 2)
        assert "last" not in full
        assert "next" not in partial

    def test_default_size(self, post_view):
        links = PageNumberPagination().get_links(post_view, [], None, {"number": 1}, total=0)
        assert links["last"] == "/api/posts" + _page_query(1, 10)

    def test_keeps_other_page_params(self, post_view):
        links = PageNumberPagination().get_links(
            post_view, [], None, {"number": 1, "size": 1, "cursor": "abc"}, total=1
        )
        assert links["first"] == (
            "/api/posts?page%5Bnumber%5D=1&page%5Bsize%5D=1&page%5Bcursor%5D=abc"
        )

    def test_meta(self):
        assert PageNumberPagination().get_meta({"number": 2, "size": 4}, total=9) == {
            "total": 9,
            "number": 2,
            "size": 4,
            "pages": 3,
        }

    def test_invalid_number(self, post_view):
        with pytest.raises(DataError):
            PageNumberPagination().get_links(post_view, [], None, {"number": "two"})


class TestOffsetPagination:

    def test_links(self, post_view, context):
        links = OffsetPagination().get_links(
            post_view, [make_post(1)], context, {"offset": 10, "limit": 10}, total=35
        )

        base = "http://example.com/api/posts?"
        assert links == {
            "first": base + "page%5Boffset%5D=0&page%5Blimit%5D=10",
            "prev": base + "page%5Boffset%5D=0&page%5Blimit%5D=10",
            "last": base + "page%5Boffset%5D=30&page%5Blimit%5D=10",
            "next": base + "page%5Boffset%5D=20&page%5Blimit%5D=10",
        }

    def test_meta(self):
        assert OffsetPagination().get_meta({"offset": 5, "limit": 5}, total=12) == {
            "total": 12,
            "limit": 5,
            "offset": 5,
        }
