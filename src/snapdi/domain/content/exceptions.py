"""Content domain exceptions."""

from snapdi.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
)


class BlogNotFoundError(EntityNotFoundError):
    default_code = ErrorCode.BLOG_NOT_FOUND

    def __init__(self, blog_id: int) -> None:
        self.blog_id = blog_id
        super().__init__(f"Blog not found: {blog_id}")


class KeywordNotFoundError(EntityNotFoundError):
    """One or more keyword ids do not exist."""

    default_code = ErrorCode.KEYWORD_NOT_FOUND

    def __init__(self, keyword_ids: int | list[int] | tuple[int, ...]) -> None:
        if isinstance(keyword_ids, int):
            keyword_ids = [keyword_ids]
        self.keyword_ids = tuple(keyword_ids)
        super().__init__(
            "Keyword not found: " + ", ".join(map(str, self.keyword_ids)),
            details={"keyword_ids": list(self.keyword_ids)},
        )


class DuplicateKeywordError(ConflictError):
    """Names are compared case-insensitively."""

    default_code = ErrorCode.DUPLICATE_KEYWORD

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        super().__init__(f"Keyword '{keyword}' already exists")
