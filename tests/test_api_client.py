"""
Tests for the API Client

Tests for Post decoding/encoding, URL construction and fetching
against canned responses.
"""

import json

import httpx
import pytest

from conftest import SAMPLE_POSTS
from posts_screen.api.client import (
    APIClient,
    DecodeError,
    FetchResult,
    Post,
    TransportError,
    URLConstructionError,
    build_posts_url,
    decode_posts,
    encode_posts,
)


class TestPost:
    """Tests for the Post record."""

    def test_from_dict(self):
        """Test decoding a single JSON object."""
        post = Post.from_dict({"userId": 3, "id": 7, "title": "t", "body": "b"})

        assert post == Post(user_id=3, id=7, title="t", body="b")

    def test_round_trip(self):
        """Test that encoding then decoding yields an equal post."""
        posts = [
            Post(user_id=1, id=1, title="t", body="b"),
            Post(user_id=0, id=-5, title="", body=""),
            Post(user_id=10, id=100, title="Unicode: café 🎉", body="multi\nline\tbody"),
        ]

        for post in posts:
            assert Post.from_dict(post.to_dict()) == post

        assert decode_posts(encode_posts(posts)) == posts

    def test_to_dict_uses_json_field_names(self):
        """Test that encoding produces the API's camelCase shape."""
        post = Post(user_id=1, id=2, title="t", body="b")

        assert post.to_dict() == {"userId": 1, "id": 2, "title": "t", "body": "b"}

    def test_is_immutable(self):
        """Test that posts cannot be modified after decoding."""
        post = Post(user_id=1, id=2, title="t", body="b")

        with pytest.raises(AttributeError):
            post.title = "changed"

    @pytest.mark.parametrize("missing", ["userId", "id", "title", "body"])
    def test_missing_field_fails(self, missing):
        """Test that each required field is enforced."""
        data = {"userId": 1, "id": 1, "title": "t", "body": "b"}
        del data[missing]

        with pytest.raises(DecodeError, match=missing):
            Post.from_dict(data)

    @pytest.mark.parametrize("key,value", [
        ("userId", "1"),
        ("id", 1.5),
        ("id", True),
        ("title", 5),
        ("body", None),
    ])
    def test_mistyped_field_fails(self, key, value):
        """Test that field types must match exactly."""
        data = {"userId": 1, "id": 1, "title": "t", "body": "b"}
        data[key] = value

        with pytest.raises(DecodeError, match=key):
            Post.from_dict(data)

    def test_extra_fields_ignored(self):
        """Test that unknown keys do not break decoding."""
        post = Post.from_dict({
            "userId": 1, "id": 1, "title": "t", "body": "b", "likes": 42,
        })

        assert post.title == "t"
        assert not hasattr(post, "likes")


class TestDecodePosts:
    """Tests for decoding whole response bodies."""

    def test_decodes_array(self):
        """Test decoding a list of valid posts."""
        posts = decode_posts(json.dumps(SAMPLE_POSTS).encode("utf-8"))

        assert [p.title for p in posts] == [item["title"] for item in SAMPLE_POSTS]

    def test_empty_array(self):
        """Test that an empty array decodes to no posts."""
        assert decode_posts(b"[]") == []

    def test_object_instead_of_array_fails(self):
        """Test that a top-level object is rejected."""
        with pytest.raises(DecodeError, match="array"):
            decode_posts(b'{"bad":true}')

    def test_invalid_json_fails(self):
        """Test that a non-JSON body is rejected."""
        with pytest.raises(DecodeError):
            decode_posts(b"<html>nope</html>")

    def test_empty_body_fails(self):
        """Test that an empty body is rejected."""
        with pytest.raises(DecodeError):
            decode_posts(b"")

    def test_one_bad_element_fails_whole_batch(self):
        """Test that a single malformed post fails the batch."""
        items = list(SAMPLE_POSTS) + [{"userId": 1, "id": 99, "title": "no body"}]

        with pytest.raises(DecodeError, match="index 3"):
            decode_posts(json.dumps(items))


class TestBuildPostsURL:
    """Tests for endpoint URL construction."""

    def test_default_endpoint(self):
        """Test building the JSONPlaceholder posts URL."""
        url = build_posts_url("https://jsonplaceholder.typicode.com", "/posts")

        assert str(url) == "https://jsonplaceholder.typicode.com/posts"

    @pytest.mark.parametrize("base_url", [
        "not a url",
        "ftp://example.com",
        "http://",
        "",
    ])
    def test_malformed_url_fails(self, base_url):
        """Test that non-absolute or non-http URLs are rejected."""
        with pytest.raises(URLConstructionError):
            build_posts_url(base_url, "/posts")


class TestAPIClient:
    """Tests for API client functionality."""

    def test_initialization(self, client):
        """Test that API client initializes with config defaults."""
        assert client.base_url == "https://jsonplaceholder.typicode.com"
        assert client.endpoint == "/posts"
        assert client.timeout == 60.0

    def test_fetch_posts(self, client, fake_api):
        """Test fetching posts from the API."""
        result = client.fetch_posts()

        assert isinstance(result, FetchResult)
        assert result.ok
        assert len(result.posts) == len(SAMPLE_POSTS)
        assert all(isinstance(p, Post) for p in result.posts)

    def test_request_shape(self, client, fake_api):
        """Test that exactly one plain GET is issued."""
        client.fetch_posts()

        assert len(fake_api.requests) == 1
        request = fake_api.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://jsonplaceholder.typicode.com/posts"
        assert "authorization" not in request.headers

    def test_transport_error_is_returned(self, client, fake_api):
        """Test that connection failures come back as TransportError."""
        fake_api.fail_with(httpx.ConnectError)

        result = client.fetch_posts()

        assert not result.ok
        assert isinstance(result.error, TransportError)
        assert isinstance(result.error.cause, httpx.ConnectError)
        assert result.posts == []

    def test_timeout_is_transport_error(self, client, fake_api):
        """Test that timeouts come back as TransportError."""
        fake_api.fail_with(httpx.ReadTimeout, "timed out")

        result = client.fetch_posts()

        assert isinstance(result.error, TransportError)

    def test_decode_error_is_returned(self, client, fake_api):
        """Test that a malformed body comes back as DecodeError."""
        fake_api.respond_with({"bad": True})

        result = client.fetch_posts()

        assert isinstance(result.error, DecodeError)

    def test_non_success_status_still_decoded(self, client, fake_api):
        """Test that the body of a non-2xx response is decoded anyway."""
        fake_api.respond_with([SAMPLE_POSTS[0]], status_code=500)

        result = client.fetch_posts()

        assert result.ok
        assert result.posts[0].title == SAMPLE_POSTS[0]["title"]

    def test_malformed_endpoint_raises(self, fake_api):
        """Test that a malformed endpoint fails before any request."""
        client = APIClient(
            base_url="not a url",
            transport=httpx.MockTransport(fake_api.handler)
        )

        with pytest.raises(URLConstructionError):
            client.fetch_posts()

        assert fake_api.requests == []
        client.close()
