"""Application services for the content domain."""

from snapdi.application.services.blog_service import BlogService, UpdateBlog
from snapdi.application.services.keyword_service import KeywordService
from snapdi.application.services.photographer_service import PhotographerService

__all__ = [
    "BlogService",
    "KeywordService",
    "PhotographerService",
    "UpdateBlog",
]
