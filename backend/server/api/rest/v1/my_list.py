from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import Response

from application.my_list import MyListService
from config.settings import MY_LIST_DEFAULT_LIMIT
from domain.my_list import ContentKind
from server.api.rest.dependencies import get_my_list_service
from server.models.schemas import AddToMyListRequest, SuccessResponse

router = APIRouter(prefix="/api/v1/users/{user_id}/my-list", tags=["my-list-v1"])


@router.post("", status_code=201)
async def add_to_my_list(
    req: AddToMyListRequest,
    user_id: str = Path(..., min_length=1, description="User id"),
    service: MyListService = Depends(get_my_list_service),
) -> Dict[str, Any]:
    item = await service.add_to_list(
        user_id=user_id,
        content_id=req.content_id,
        content_kind=ContentKind(req.content_type),
    )
    return SuccessResponse(data=item.to_public()).model_dump()


@router.delete("/{content_id}", status_code=204, response_class=Response)
async def remove_from_my_list(
    user_id: str = Path(..., min_length=1, description="User id"),
    content_id: str = Path(..., min_length=1, description="Catalogue content id"),
    service: MyListService = Depends(get_my_list_service),
) -> Response:
    await service.remove_from_list(user_id=user_id, content_id=content_id)
    return Response(status_code=204)


@router.get("")
async def list_my_items(
    user_id: str = Path(..., min_length=1, description="User id"),
    # Range is enforced by the service so it can answer with a stable error code.
    limit: int = Query(MY_LIST_DEFAULT_LIMIT, description="Page size (1-100)"),
    cursor: Optional[str] = Query(default=None, description="Opaque nextCursor of the previous page"),
    service: MyListService = Depends(get_my_list_service),
) -> Dict[str, Any]:
    page = await service.list_items(user_id=user_id, limit=limit, cursor=cursor)
    return SuccessResponse(data=page.to_public()).model_dump()
