"""Blog router: posts, listings and keyword associations."""

import logging

from fastapi import APIRouter, Response, status

from snapdi.application.services import UpdateBlog
from snapdi.domain.shared.pagination import PageRequest
from snapdi.domain.shared.results import AssociationResult, Outcome
from snapdi.presentation.api.dependencies import (
    BlogServiceDep,
    CurrentAccount,
    ensure_self_or_admin,
)
from snapdi.presentation.api.schemas import (
    AssociationResponse,
    BlogResponse,
    CreateBlogRequest,
    KeywordIdsRequest,
    KeywordNamesRequest,
    PagedResponse,
    UpdateBlogRequest,
)
from snapdi_identity import Account

logger = logging.getLogger(__name__)

router = APIRouter()

_OUTCOME_STATUS = {
    Outcome.OK: status.HTTP_200_OK,
    Outcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.CONFLICT: status.HTTP_409_CONFLICT,
}


def _association_response(
    result: AssociationResult,
    response: Response,
) -> AssociationResponse:
    response.status_code = _OUTCOME_STATUS[result.outcome]
    return AssociationResponse.from_result(result)


async def _ensure_can_edit(
    blog_service: BlogServiceDep,
    account: Account,
    blog_id: int,
) -> None:
    ensure_self_or_admin(account, await blog_service.get_author_id(blog_id))


# -----------------------------------------------------------------------------
# Listings
# -----------------------------------------------------------------------------


@router.get("", summary="List all blogs (newest first)")
async def list_blogs(
    blog_service: BlogServiceDep,
    page_number: int = 1,
    page_size: int = 10,
) -> PagedResponse[BlogResponse]:
    result = await blog_service.list_blogs(PageRequest.create(page_number, page_size))
    return PagedResponse[BlogResponse].from_result(result, BlogResponse.from_dto)


@router.get("/active", summary="List active blogs (newest first)")
async def list_active_blogs(
    blog_service: BlogServiceDep,
    page_number: int = 1,
    page_size: int = 10,
) -> PagedResponse[BlogResponse]:
    result = await blog_service.list_active_blogs(
        PageRequest.create(page_number, page_size),
    )
    return PagedResponse[BlogResponse].from_result(result, BlogResponse.from_dto)


@router.get("/author/{author_id}", summary="List an author's blogs")
async def list_blogs_by_author(
    author_id: int,
    blog_service: BlogServiceDep,
    page_number: int = 1,
    page_size: int = 10,
) -> PagedResponse[BlogResponse]:
    result = await blog_service.list_blogs_by_author(
        author_id,
        PageRequest.create(page_number, page_size),
    )
    return PagedResponse[BlogResponse].from_result(result, BlogResponse.from_dto)


@router.get("/keyword/{keyword_id}", summary="List blogs tagged with a keyword")
async def list_blogs_by_keyword(
    keyword_id: int,
    blog_service: BlogServiceDep,
    page_number: int = 1,
    page_size: int = 10,
) -> PagedResponse[BlogResponse]:
    result = await blog_service.list_blogs_by_keyword(
        keyword_id,
        PageRequest.create(page_number, page_size),
    )
    return PagedResponse[BlogResponse].from_result(result, BlogResponse.from_dto)


# -----------------------------------------------------------------------------
# CRUD
# -----------------------------------------------------------------------------


@router.get(
    "/{blog_id}",
    summary="Get a blog",
    responses={404: {"description": "Blog not found"}},
)
async def get_blog(blog_id: int, blog_service: BlogServiceDep) -> BlogResponse:
    return BlogResponse.from_dto(await blog_service.get_blog(blog_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a blog",
    responses={
        403: {"description": "Posting for another author requires admin"},
        404: {"description": "Author or keyword not found"},
    },
)
async def create_blog(
    request: CreateBlogRequest,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> BlogResponse:
    author_id = request.author_id or current_account.id
    ensure_self_or_admin(current_account, author_id)  # type: ignore[arg-type]

    blog = await blog_service.create_blog(
        author_id=author_id,  # type: ignore[arg-type]
        title=request.title,
        content=request.content,
        thumbnail_url=request.thumbnail_url,
        keyword_ids=request.keyword_ids,
        keyword_names=request.keyword_names,
        is_active=request.is_active,
    )
    return BlogResponse.from_dto(blog)


@router.put(
    "/{blog_id}",
    summary="Update a blog",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Blog or keyword not found"},
    },
)
async def update_blog(
    blog_id: int,
    request: UpdateBlogRequest,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> BlogResponse:
    await _ensure_can_edit(blog_service, current_account, blog_id)
    blog = await blog_service.update_blog(
        blog_id,
        UpdateBlog(
            title=request.title,
            content=request.content,
            thumbnail_url=request.thumbnail_url,
            is_active=request.is_active,
            keyword_ids=request.keyword_ids,
            keyword_names=request.keyword_names,
        ),
    )
    return BlogResponse.from_dto(blog)


@router.delete(
    "/{blog_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a blog",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Blog not found"},
    },
)
async def delete_blog(
    blog_id: int,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> None:
    await _ensure_can_edit(blog_service, current_account, blog_id)
    await blog_service.delete_blog(blog_id)


# -----------------------------------------------------------------------------
# Keyword Associations
# -----------------------------------------------------------------------------


@router.post(
    "/{blog_id}/keywords",
    summary="Link keywords to a blog",
    responses={404: {"description": "Blog or keyword not found (nothing linked)"}},
)
async def add_keywords(
    blog_id: int,
    request: KeywordIdsRequest,
    response: Response,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> AssociationResponse:
    await _ensure_can_edit(blog_service, current_account, blog_id)
    result = await blog_service.add_keywords(blog_id, request.keyword_ids)
    return _association_response(result, response)


@router.post(
    "/{blog_id}/keywords/by-name",
    summary="Link keywords by name, creating missing ones",
)
async def add_keywords_by_name(
    blog_id: int,
    request: KeywordNamesRequest,
    response: Response,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> AssociationResponse:
    await _ensure_can_edit(blog_service, current_account, blog_id)
    result = await blog_service.add_keywords_by_name(blog_id, request.keyword_names)
    return _association_response(result, response)


@router.put(
    "/{blog_id}/keywords",
    summary="Replace a blog's keywords",
    responses={404: {"description": "Blog or keyword not found (nothing changed)"}},
)
async def replace_keywords(
    blog_id: int,
    request: KeywordIdsRequest,
    response: Response,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> AssociationResponse:
    await _ensure_can_edit(blog_service, current_account, blog_id)
    result = await blog_service.replace_keywords(blog_id, request.keyword_ids)
    return _association_response(result, response)


@router.post(
    "/{blog_id}/keywords/{keyword_id}",
    summary="Link a single keyword",
    responses={409: {"description": "Keyword already linked"}},
)
async def add_keyword(
    blog_id: int,
    keyword_id: int,
    response: Response,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> AssociationResponse:
    await _ensure_can_edit(blog_service, current_account, blog_id)
    result = await blog_service.add_keyword(blog_id, keyword_id)
    return _association_response(result, response)


@router.delete(
    "/{blog_id}/keywords/{keyword_id}",
    summary="Unlink a keyword from a blog",
    responses={404: {"description": "Keyword not linked to this blog"}},
)
async def remove_keyword(
    blog_id: int,
    keyword_id: int,
    response: Response,
    current_account: CurrentAccount,
    blog_service: BlogServiceDep,
) -> AssociationResponse:
    await _ensure_can_edit(blog_service, current_account, blog_id)
    result = await blog_service.remove_keyword(blog_id, keyword_id)
    return _association_response(result, response)
