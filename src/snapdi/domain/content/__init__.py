"""Content domain: blogs, keywords and photographer profiles."""

from snapdi.domain.content.exceptions import (
    BlogNotFoundError,
    DuplicateKeywordError,
    KeywordNotFoundError,
)

__all__ = [
    "BlogNotFoundError",
    "DuplicateKeywordError",
    "KeywordNotFoundError",
]
