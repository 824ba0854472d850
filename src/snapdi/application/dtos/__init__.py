"""Data transfer objects handed from content services to the API layer."""

from snapdi.application.dtos.content_dto import (
    BlogDTO,
    KeywordDTO,
    PhotographerProfileDTO,
    UserWithPhotographerProfile,
)

__all__ = [
    "BlogDTO",
    "KeywordDTO",
    "PhotographerProfileDTO",
    "UserWithPhotographerProfile",
]
