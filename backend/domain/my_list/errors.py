from __future__ import annotations

from typing import Optional

from domain.my_list.list_item import ContentKind


class MyListError(Exception):
    """Base class for My List failures surfaced to callers.

    `code` is a stable machine-readable identifier; the transport maps it to
    a status (see `server/api/rest/error_handlers.py`).
    """

    code: str = "my_list_error"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ContentNotFound(MyListError):
    def __init__(self, content_id: str, kind: ContentKind) -> None:
        if kind is ContentKind.MOVIE:
            super().__init__(f"Movie {content_id} not found", code="movie_not_found")
        else:
            super().__init__(f"TV show {content_id} not found", code="show_not_found")
        self.content_id = content_id
        self.kind = kind


class AlreadyInList(MyListError):
    code = "already_in_list"

    def __init__(self, content_id: str) -> None:
        super().__init__(f"Content {content_id} already exists in the user's list")
        self.content_id = content_id


class NotInList(MyListError):
    code = "not_in_list"

    def __init__(self, content_id: str) -> None:
        super().__init__(f"Content {content_id} is not in the user's list")
        self.content_id = content_id


class InvalidCursor(MyListError):
    code = "invalid_cursor"

    def __init__(self, message: str = "Invalid cursor provided") -> None:
        super().__init__(message)


class LimitOutOfRange(MyListError):
    def __init__(self, limit: int, *, max_limit: int) -> None:
        if limit > max_limit:
            super().__init__(f"limit exceeds maximum of {max_limit}", code="limit_too_large")
        else:
            super().__init__("limit must be a positive integer", code="invalid_limit")
        self.limit = limit
        self.max_limit = max_limit


class InternalError(MyListError):
    code = "internal_error"

    def __init__(self, operation: str) -> None:
        super().__init__("An unexpected error occurred")
        self.operation = operation
