"""
API Client Module

Provides the HTTP client and Post record for the JSONPlaceholder posts feed.
"""

from .client import (
    APIClient,
    DecodeError,
    FetchError,
    FetchResult,
    Post,
    TransportError,
    URLConstructionError,
    build_posts_url,
    decode_posts,
    encode_posts,
)

__all__ = [
    "APIClient",
    "DecodeError",
    "FetchError",
    "FetchResult",
    "Post",
    "TransportError",
    "URLConstructionError",
    "build_posts_url",
    "decode_posts",
    "encode_posts",
]
