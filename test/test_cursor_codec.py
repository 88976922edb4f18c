import base64
import json
import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from domain.my_list import (
    ContentKind,
    CursorPayload,
    InvalidCursor,
    ListItem,
    decode_cursor,
    encode_cursor,
)


def _b64(raw: str) -> str:
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


class TestCursorCodec(unittest.TestCase):
    def test_round_trip(self) -> None:
        payloads = [
            CursorPayload(added_at="2024-01-01T00:00:00.000Z", content_id="movie-001"),
            CursorPayload(added_at="2023-12-31T23:59:59.999Z", content_id="show/über-名"),
        ]
        for payload in payloads:
            with self.subTest(payload=payload):
                self.assertEqual(decode_cursor(encode_cursor(payload)), payload)

    def test_encoding_is_deterministic_and_opaque(self) -> None:
        payload = CursorPayload(added_at="2024-01-01T00:00:00.000Z", content_id="movie-001")
        token = encode_cursor(payload)

        self.assertEqual(token, encode_cursor(payload))
        self.assertNotIn("movie-001", token)
        decoded = json.loads(base64.urlsafe_b64decode(token))
        self.assertEqual(decoded, {"addedAt": "2024-01-01T00:00:00.000Z", "contentId": "movie-001"})

    def test_key_order_does_not_matter(self) -> None:
        token = _b64('{"contentId":"movie-001","addedAt":"2024-01-01T00:00:00.000Z"}')
        self.assertEqual(
            decode_cursor(token),
            CursorPayload(added_at="2024-01-01T00:00:00.000Z", content_id="movie-001"),
        )

    def test_from_item_uses_millisecond_iso_timestamp(self) -> None:
        item = ListItem(
            user_id="u1",
            content_id="movie-001",
            content_kind=ContentKind.MOVIE,
            title="Movie One",
            added_at=datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc),
        )
        payload = CursorPayload.from_item(item)

        self.assertEqual(payload.added_at, "2024-05-06T07:08:09.123Z")
        self.assertEqual(payload.added_at_datetime(), datetime(2024, 5, 6, 7, 8, 9, 123000, tzinfo=timezone.utc))

    def test_tokens_are_url_safe(self) -> None:
        standard_tokens = []
        # Shifting the payload walks "???" and ">>>" through every base64
        # alignment, so some standard encodings contain "/" or "+".
        for pad in range(3):
            payload = CursorPayload(added_at="2024-01-01T00:00:00.000Z", content_id="x" * pad + "???>>>~~~")
            token = encode_cursor(payload)
            with self.subTest(pad=pad):
                self.assertNotIn("+", token)
                self.assertNotIn("/", token)
                self.assertEqual(decode_cursor(token), payload)
            standard_tokens.append(base64.b64encode(json.dumps(payload.to_dict()).encode("utf-8")).decode("ascii"))

        with_std_chars = [t for t in standard_tokens if "+" in t or "/" in t]
        self.assertTrue(with_std_chars)
        for token in with_std_chars:
            with self.assertRaises(InvalidCursor):
                decode_cursor(token)

    def test_rejects_non_canonical_timestamps(self) -> None:
        for added_at in (
            "2024-01-01T00:00:00.1239Z",
            "2024-01-01T00:00:00.123456Z",
            "2024-01-01T00:00:00Z",
            "2024-01-01T00:00:00.000+00:00",
            "2024-01-01T02:00:00.000+02:00",
        ):
            with self.subTest(added_at=added_at):
                token = _b64(json.dumps({"addedAt": added_at, "contentId": "movie-001"}))
                with self.assertRaises(InvalidCursor):
                    decode_cursor(token)

    def test_rejects_malformed_tokens(self) -> None:
        bad_tokens = [
            "",
            "not-base64",
            "invalid-base64",
            "abc",  # bad padding
            _b64("not json"),
            _b64("[1, 2]"),
            _b64("{}"),
            _b64('{"addedAt": "2024-01-01T00:00:00.000Z"}'),
            _b64('{"contentId": "movie-001"}'),
            _b64('{"addedAt": "", "contentId": "movie-001"}'),
            _b64('{"addedAt": "2024-01-01T00:00:00.000Z", "contentId": ""}'),
            _b64('{"addedAt": 1704067200000, "contentId": "movie-001"}'),
            _b64('{"addedAt": "yesterday", "contentId": "movie-001"}'),
            base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode("ascii"),
            "ünicode",
        ]
        for token in bad_tokens:
            with self.subTest(token=token):
                with self.assertRaises(InvalidCursor) as ctx:
                    decode_cursor(token)
                self.assertEqual(ctx.exception.code, "invalid_cursor")


if __name__ == "__main__":
    unittest.main()
