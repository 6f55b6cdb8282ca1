"""
Publisher API endpoints.

Reads are public; create, update and delete require a bearer token.
Error kinds raised below are mapped to HTTP responses in `main.py`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from publisher_api.auth import dependencies as auth_dependencies
from publisher_api.core.responses import ErrorResponse, SuccessResponse

from . import schemas
from .dependencies import get_publisher_service, parse_publisher_id
from .service import PublisherService

router = APIRouter(prefix="/publishers")

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}
_AUTH_ERRORS = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[schemas.PublisherCreateResponse],
    responses={**_ERRORS, **_AUTH_ERRORS},
)
async def create_publisher(
    payload: schemas.PublisherCreateRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
    service: PublisherService = Depends(get_publisher_service),
) -> SuccessResponse[schemas.PublisherCreateResponse]:
    data = await service.create(payload)
    return SuccessResponse(message="Publisher saved.", data=data)


@router.get(
    "",
    response_model=SuccessResponse[list[schemas.PublisherDetailResponse]],
    responses={500: {"model": ErrorResponse}},
)
async def list_publishers(
    service: PublisherService = Depends(get_publisher_service),
) -> SuccessResponse[list[schemas.PublisherDetailResponse]]:
    data = await service.get_list()
    return SuccessResponse(message="Publisher list.", data=data)


@router.get(
    "/{publisher_id}",
    response_model=SuccessResponse[schemas.PublisherDetailResponse],
    responses=_ERRORS,
)
async def get_publisher(
    publisher_id: int = Depends(parse_publisher_id),
    service: PublisherService = Depends(get_publisher_service),
) -> SuccessResponse[schemas.PublisherDetailResponse]:
    data = await service.get_by_id(publisher_id)
    return SuccessResponse(message="Publisher detail.", data=data)


@router.put(
    "/{publisher_id}",
    response_model=SuccessResponse[schemas.PublisherDetailResponse],
    responses={**_ERRORS, **_AUTH_ERRORS},
)
async def update_publisher(
    payload: schemas.PublisherUpdateRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
    publisher_id: int = Depends(parse_publisher_id),
    service: PublisherService = Depends(get_publisher_service),
) -> SuccessResponse[schemas.PublisherDetailResponse]:
    """
    Partial update: only keys present in the body are changed.
    """
    data = await service.update(publisher_id, payload)
    return SuccessResponse(message="Publisher updated.", data=data)


@router.delete(
    "/{publisher_id}",
    response_model=SuccessResponse[None],
    response_model_exclude_none=True,
    responses={**_ERRORS, **_AUTH_ERRORS},
)
async def delete_publisher(
    _: dict = Depends(auth_dependencies.get_current_user),
    publisher_id: int = Depends(parse_publisher_id),
    service: PublisherService = Depends(get_publisher_service),
) -> SuccessResponse[None]:
    await service.delete(publisher_id)
    return SuccessResponse(message="Publisher deleted.")
