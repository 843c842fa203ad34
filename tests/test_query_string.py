"""Tests for query-string flattening and encoding."""

from collections import OrderedDict

from jsonapi_views.utils import encode_query, flatten


class TestFlatten:

    def test_scalar(self):
        assert flatten({"number": 5}) == [("number", 5)]

    def test_sequence(self):
        assert flatten({"alphabet": ["a", "b", "c"]}) == [
            ("alphabet[]", "a"),
            ("alphabet[]", "b"),
            ("alphabet[]", "c"),
        ]

    def test_tuple_is_a_sequence(self):
        assert flatten({"ids": (1, 2)}) == [("ids[]", 1), ("ids[]", 2)]

    def test_nested_mapping(self):
        assert flatten({"filters": {"age": 18, "name": "John"}}) == [
            ("filters[age]", 18),
            ("filters[name]", "John"),
        ]

    def test_sequence_inside_mapping(self):
        assert flatten({"filters": {"tags": ["a", "b"]}}) == [
            ("filters[tags][]", "a"),
            ("filters[tags][]", "b"),
        ]

    def test_deeper_mapping_nesting(self):
        assert flatten({"a": {"b": {"c": 1}}}) == [("a[b][c]", 1)]

    def test_mappings_inside_sequences_are_not_flattened(self):
        assert flatten({"items": [{"id": 1}]}) == [("items[]", {"id": 1})]

    def test_none_passes_through(self):
        assert flatten({"cursor": None}) == [("cursor", None)]

    def test_follows_input_order(self):
        params = OrderedDict([("size", 10), ("number", 1)])
        assert flatten(params) == [("size", 10), ("number", 1)]

    def test_empty(self):
        assert flatten({}) == []

    def test_does_not_mutate_input(self):
        params = {"filters": {"age": 18}}
        flatten(params)
        assert params == {"filters": {"age": 18}}


class TestEncodeQuery:

    def test_page_prefix(self):
        assert encode_query({"number": 1, "size": 10}, prefix="page") == (
            "page%5Bnumber%5D=1&page%5Bsize%5D=10"
        )

    def test_prefix_keeps_nested_brackets(self):
        assert encode_query({"cursor": {"after": "x"}}, prefix="page") == (
            "page%5Bcursor%5D%5Bafter%5D=x"
        )

    def test_without_prefix(self):
        assert encode_query({"filter": {"age": 18}}) == "filter%5Bage%5D=18"

    def test_none_encodes_as_empty(self):
        assert encode_query({"cursor": None}, prefix="page") == "page%5Bcursor%5D="

    def test_empty(self):
        assert encode_query({}, prefix="page") == ""
