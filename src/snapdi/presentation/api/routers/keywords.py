"""Keyword router."""

from fastapi import APIRouter, status

from snapdi.domain.shared.pagination import PageRequest
from snapdi.presentation.api.dependencies import AdminAccount, KeywordServiceDep
from snapdi.presentation.api.schemas import (
    CreateKeywordRequest,
    KeywordResponse,
    PagedResponse,
    UpdateKeywordRequest,
)

router = APIRouter()


@router.get("", summary="List all keywords")
async def list_keywords(keyword_service: KeywordServiceDep) -> list[KeywordResponse]:
    return [KeywordResponse.from_dto(k) for k in await keyword_service.list_keywords()]


@router.get("/paged", summary="List keywords page by page")
async def list_keywords_paged(
    keyword_service: KeywordServiceDep,
    page_number: int = 1,
    page_size: int = 10,
) -> PagedResponse[KeywordResponse]:
    result = await keyword_service.list_keywords_paged(
        PageRequest.create(page_number, page_size),
    )
    return PagedResponse[KeywordResponse].from_result(result, KeywordResponse.from_dto)


@router.get(
    "/{keyword_id}",
    summary="Get a keyword",
    responses={404: {"description": "Keyword not found"}},
)
async def get_keyword(
    keyword_id: int,
    keyword_service: KeywordServiceDep,
) -> KeywordResponse:
    return KeywordResponse.from_dto(await keyword_service.get_keyword(keyword_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a keyword",
    responses={
        403: {"description": "Admin access required"},
        409: {"description": "Keyword already exists"},
    },
)
async def create_keyword(
    request: CreateKeywordRequest,
    _admin: AdminAccount,
    keyword_service: KeywordServiceDep,
) -> KeywordResponse:
    keyword = await keyword_service.create_keyword(request.keyword, request.description)
    return KeywordResponse.from_dto(keyword)


@router.put(
    "/{keyword_id}",
    summary="Rename a keyword or change its description",
    responses={
        404: {"description": "Keyword not found"},
        409: {"description": "Keyword already exists"},
    },
)
async def update_keyword(
    keyword_id: int,
    request: UpdateKeywordRequest,
    _admin: AdminAccount,
    keyword_service: KeywordServiceDep,
) -> KeywordResponse:
    keyword = await keyword_service.update_keyword(
        keyword_id,
        keyword=request.keyword,
        description=request.description,
    )
    return KeywordResponse.from_dto(keyword)


@router.delete(
    "/{keyword_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a keyword (it is removed from every blog)",
    responses={404: {"description": "Keyword not found"}},
)
async def delete_keyword(
    keyword_id: int,
    _admin: AdminAccount,
    keyword_service: KeywordServiceDep,
) -> None:
    await keyword_service.delete_keyword(keyword_id)
