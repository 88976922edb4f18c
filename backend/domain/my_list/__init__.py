from domain.my_list.cursor import CursorPayload, decode_cursor, encode_cursor
from domain.my_list.errors import (
    AlreadyInList,
    ContentNotFound,
    InternalError,
    InvalidCursor,
    LimitOutOfRange,
    MyListError,
    NotInList,
)
from domain.my_list.list_item import (
    CatalogEntry,
    ContentKind,
    ListItem,
    ListPage,
    format_timestamp,
    parse_timestamp,
    truncate_to_millis,
    utc_now_millis,
)

__all__ = [
    "AlreadyInList",
    "CatalogEntry",
    "ContentKind",
    "ContentNotFound",
    "CursorPayload",
    "InternalError",
    "InvalidCursor",
    "LimitOutOfRange",
    "ListItem",
    "ListPage",
    "MyListError",
    "NotInList",
    "decode_cursor",
    "encode_cursor",
    "format_timestamp",
    "parse_timestamp",
    "truncate_to_millis",
    "utc_now_millis",
]
