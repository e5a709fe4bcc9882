"""
Decoding of uploaded text files.

Uploads come from arbitrary editors, so anything that is not UTF-8 goes
through charset-normalizer before the text reaches the checker.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from charset_normalizer import from_bytes

from .config import get_settings
from .rules import MIN_LEGACY_UPLOAD_BYTES

logger = logging.getLogger(__name__)


class UndecodableUpload(ValueError):
    pass


def decode_text(raw: bytes, encodings: Optional[Sequence[str]] = None) -> Tuple[str, str]:
    """
    Decode `raw` into text and return (text, encoding_used).

    Rules:
    - UTF-8 with a BOM is decoded as utf-8-sig so the BOM is not part of the text.
    - Plain UTF-8 is tried strictly next; it never needs detection.
    - Otherwise each legacy encoding is tried in order, and the first one
      charset-normalizer finds coherent wins. Single-byte encodings decode
      almost anything, so order matters: the default puts latin_1 before
      cp1251 because Cyrillic read as latin_1 is flagged as accent soup.
    - Non-UTF-8 input shorter than MIN_LEGACY_UPLOAD_BYTES is rejected;
      detection on a handful of bytes picks arbitrary code pages.
    - Trailing newlines are dropped; editors append them and they would
      count toward the raw length during validation.
    """
    if raw.startswith(b"\xef\xbb\xbf"):
        return _strip_newlines(raw.decode("utf-8-sig")), "utf-8-sig"

    try:
        return _strip_newlines(raw.decode("utf-8")), "utf-8"
    except UnicodeDecodeError:
        pass

    if len(raw) < MIN_LEGACY_UPLOAD_BYTES:
        raise UndecodableUpload(
            f"File is not UTF-8 and too short ({len(raw)} bytes) to detect its encoding; save it as UTF-8"
        )

    if encodings is None:
        encodings = get_settings().legacy_encodings

    for encoding in encodings:
        match = from_bytes(raw, cp_isolation=[encoding]).best()
        if match is None:
            logger.debug("upload rejected as %s", encoding)
            continue
        logger.warning("upload is not UTF-8, decoded as %s", match.encoding)
        return _strip_newlines(raw.decode(match.encoding)), match.encoding

    raise UndecodableUpload("Could not decode uploaded file")


def _strip_newlines(text: str) -> str:
    return text.rstrip("\r\n")
