"""Tests for request canonicalization."""

import pytest

from client_auth.signing.canonical import canonicalize, parse_query
from client_auth.signing.exceptions import MalformedRequestError, SigningPreparationError


class TestParseQuery:
    """Tests for parse_query."""

    def test_empty(self):
        assert parse_query("") == {}

    def test_pairs(self):
        assert parse_query("a=1&b=2") == {"a": "1", "b": "2"}

    def test_empty_value_allowed(self):
        assert parse_query("a=") == {"a": ""}

    def test_value_may_contain_equals(self):
        assert parse_query("filter=a=b") == {"filter": "a=b"}

    def test_percent_decoding(self):
        assert parse_query("name=hello%20world&k%2Fx=1") == {"name": "hello world", "k/x": "1"}

    def test_duplicate_key_keeps_last(self):
        assert parse_query("a=1&a=2") == {"a": "2"}

    def test_segment_without_equals_rejected(self):
        with pytest.raises(MalformedRequestError, match="'a'"):
            parse_query("a")

    def test_empty_key_rejected(self):
        with pytest.raises(MalformedRequestError):
            parse_query("=1")

    def test_trailing_ampersand_rejected(self):
        with pytest.raises(MalformedRequestError):
            parse_query("a=1&")


class TestCanonicalize:
    """Tests for canonicalize."""

    def test_splits_uri_and_query(self):
        canonical = canonicalize("get", "https://h/p?a=1&b=2")

        assert canonical.method == "GET"
        assert canonical.uri == "https://h/p"
        assert dict(canonical.query_params) == {"a": "1", "b": "2"}
        assert canonical.body is None
        assert canonical.content_stream() is None

    def test_empty_path_becomes_root(self):
        assert canonicalize("GET", "https://h").uri == "https://h/"

    def test_drops_fragment(self):
        assert canonicalize("GET", "https://h/p#frag").uri == "https://h/p"

    def test_malformed_query(self):
        with pytest.raises(MalformedRequestError):
            canonicalize("GET", "https://h/p?a")

    def test_malformed_query_is_preparation_error(self):
        with pytest.raises(SigningPreparationError):
            canonicalize("GET", "https://h/p?a")

    def test_relative_uri_rejected(self):
        with pytest.raises(SigningPreparationError, match="relative"):
            canonicalize("GET", "/p?a=1")

    def test_json_body(self):
        canonical = canonicalize("POST", "https://h/p", body={"name": "x"})

        assert canonical.body == b'{\n  "name": "x"\n}'

    def test_bytes_body_unchanged(self):
        canonical = canonicalize("POST", "https://h/p", body=b"\x00\x01raw")
        assert canonical.body == b"\x00\x01raw"

    def test_content_stream_is_repeatable(self):
        canonical = canonicalize("PUT", "https://h/p", body="payload")

        first = canonical.content_stream().read()
        second = canonical.content_stream().read()

        assert first == second == b"payload"

    def test_custom_encoder(self):
        canonical = canonicalize("POST", "https://h/p", body=42, body_encoder=lambda e: b"n=%d" % e)
        assert canonical.body == b"n=42"

    def test_encoder_failure(self):
        def failing(entity):
            raise TypeError("not serializable")

        with pytest.raises(SigningPreparationError, match="serialize") as exc_info:
            canonicalize("POST", "https://h/p", body=object(), body_encoder=failing)

        assert isinstance(exc_info.value.cause, TypeError)

    def test_circular_body_fails(self):
        body = {}
        body["self"] = body

        with pytest.raises(SigningPreparationError):
            canonicalize("POST", "https://h/p", body=body)

    def test_headers_snapshot(self):
        headers = {"Content-Type": "application/json"}
        canonical = canonicalize("GET", "https://h/p", headers)

        headers["X-Later"] = "1"

        assert dict(canonical.headers) == {"Content-Type": "application/json"}

    def test_canonical_request_is_immutable(self):
        canonical = canonicalize("GET", "https://h/p?a=1")

        with pytest.raises(TypeError):
            canonical.query_params["b"] = "2"
        with pytest.raises(AttributeError):
            canonical.method = "POST"
