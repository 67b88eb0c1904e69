"""
API Client Module

HTTP client for fetching posts from the JSONPlaceholder API.
Issues a single GET per call, decodes the body strictly into Post
records and reports the outcome as a FetchResult instead of raising.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from ..config import config


logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base class for everything that can go wrong in a fetch cycle."""


class TransportError(FetchError):
    """The request failed before a response body was obtained."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DecodeError(FetchError):
    """The response body does not match the expected post array shape."""


class URLConstructionError(FetchError):
    """The endpoint could not be turned into an absolute http(s) URL."""


# JSON key -> (attribute name, expected type)
_POST_FIELDS = (
    ("userId", "user_id", int),
    ("id", "id", int),
    ("title", "title", str),
    ("body", "body", str),
)


def _check_type(value: Any, expected: type) -> bool:
    # bool is an int subclass but never a valid JSON integer here
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


@dataclass(frozen=True)
class Post:
    """Represents a post from the API."""
    user_id: int
    id: int
    title: str
    body: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Post":
        """
        Decode a post from a JSON object.

        Args:
            data: Parsed JSON object with userId, id, title and body.

        Returns:
            The decoded Post.

        Raises:
            DecodeError: If the object is not a mapping, or a required
                field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise DecodeError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        values = {}
        for key, attr, expected in _POST_FIELDS:
            if key not in data:
                raise DecodeError(f"Missing required field '{key}'")
            value = data[key]
            if not _check_type(value, expected):
                raise DecodeError(
                    f"Field '{key}' must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            values[attr] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Encode the post back into its JSON object shape."""
        return {key: getattr(self, attr) for key, attr, _ in _POST_FIELDS}


def decode_posts(data: Union[bytes, str]) -> List[Post]:
    """
    Decode a response body into a list of posts.

    The whole batch fails if any element is malformed.

    Args:
        data: Raw response body.

    Returns:
        List of Post objects, in body order.

    Raises:
        DecodeError: If the body is not a JSON array of valid posts.
    """
    try:
        items = json.loads(data)
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(items, list):
        raise DecodeError(
            f"Expected a JSON array, got {type(items).__name__}"
        )

    posts = []
    for index, item in enumerate(items):
        try:
            posts.append(Post.from_dict(item))
        except DecodeError as e:
            raise DecodeError(f"Post at index {index}: {e}") from e

    return posts


def encode_posts(posts: Iterable[Post], indent: Optional[int] = None) -> str:
    """Encode posts back into a JSON array string."""
    return json.dumps([post.to_dict() for post in posts], indent=indent)


def build_posts_url(base_url: str, endpoint: str) -> httpx.URL:
    """
    Join the base URL and endpoint into a request URL.

    Raises:
        URLConstructionError: If the result is not an absolute http(s) URL.
    """
    raw = f"{base_url}{endpoint}"
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError) as e:
        raise URLConstructionError(f"Invalid URL '{raw}': {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise URLConstructionError(f"Invalid URL '{raw}': not an absolute http(s) URL")

    return url


@dataclass
class FetchResult:
    """Outcome of one fetch: either posts or the error that stopped it."""
    posts: List[Post] = field(default_factory=list)
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, posts: List[Post]) -> "FetchResult":
        return cls(posts=list(posts))

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)


class APIClient:
    """
    HTTP client for the JSONPlaceholder API.

    Features:
    - One GET per fetch, no retries
    - Strict decoding into Post records
    - Transport and decode failures returned, not raised
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root (uses config default if None).
            endpoint: Posts path (uses config default if None).
            timeout: Request timeout in seconds (uses config default if None).
            transport: Optional httpx transport, e.g. a MockTransport.
        """
        self.base_url = base_url if base_url is not None else config.api.base_url
        self.endpoint = endpoint if endpoint is not None else config.api.posts_endpoint
        self.timeout = timeout or config.api.timeout_seconds
        self._client = httpx.Client(timeout=self.timeout, transport=transport)
        logger.info(f"APIClient initialized (base_url: {self.base_url})")

    def posts_url(self) -> httpx.URL:
        """Build the posts endpoint URL."""
        return build_posts_url(self.base_url, self.endpoint)

    def fetch_posts(self, url: Optional[httpx.URL] = None) -> FetchResult:
        """
        Fetch posts from the API.

        Args:
            url: Pre-built request URL (built from base_url/endpoint if None).

        Returns:
            FetchResult with the decoded posts, or the TransportError or
            DecodeError that ended the fetch.

        Raises:
            URLConstructionError: If url is None and the configured
                endpoint is malformed.
        """
        url = url if url is not None else self.posts_url()

        logger.info(f"Fetching posts from {url}")

        try:
            response = self._client.get(url)
        except httpx.RequestError as e:
            error = TransportError(f"Error fetching posts: {e}", cause=e)
            logger.error(str(error))
            return FetchResult.failure(error)

        if not response.is_success:
            logger.warning(
                f"Unexpected status {response.status_code} from {url}, decoding body anyway"
            )

        try:
            posts = decode_posts(response.content)
        except DecodeError as e:
            logger.error(f"Error decoding JSON: {e}")
            return FetchResult.failure(e)

        logger.info(f"Fetched {len(posts)} posts successfully")
        return FetchResult.success(posts)

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
