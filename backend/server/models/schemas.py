from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AddToMyListRequest(BaseModel):
    """Body of `POST /api/v1/users/{user_id}/my-list`."""

    model_config = ConfigDict(populate_by_name=True)

    content_id: str = Field(..., alias="contentId", min_length=1, description="Catalogue content id")
    content_type: Literal["Movie", "TVShow"] = Field(..., alias="contentType", description="Movie | TVShow")


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Envelope for every failed request."""

    success: Literal[False] = False
    error: ErrorBody


class SuccessResponse(BaseModel):
    success: Literal[True] = True
    data: Optional[Dict[str, Any]] = None
