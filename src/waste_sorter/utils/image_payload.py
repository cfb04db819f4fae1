"""Helpers for moving images around as base64 strings and data URIs."""

import base64
import io
import re
from typing import Tuple

from PIL import Image, UnidentifiedImageError

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URI_RE = re.compile(r"^data:([^;,]+)?(?:;[^,]*)?,(.*)$", re.DOTALL)


def split_data_uri(image: str) -> Tuple[str, str]:
    """
    Split a payload into (mime_type, bare_base64).

    Anything after the first comma is treated as the base64 body, so a
    `data:<mime>;base64,` header is dropped. Payloads without a header are
    assumed to be JPEG.
    """
    payload = image.strip()
    match = _DATA_URI_RE.match(payload)
    if match:
        return match.group(1) or DEFAULT_MIME_TYPE, match.group(2)
    if "," in payload:
        return DEFAULT_MIME_TYPE, payload.split(",", 1)[1]
    return DEFAULT_MIME_TYPE, payload


def strip_data_uri(image: str) -> str:
    return split_data_uri(image)[1]


def to_data_uri(image: str) -> str:
    """Rebuild a full `data:<mime>;base64,<body>` URI from any accepted payload."""
    mime_type, data = split_data_uri(image)
    return f"data:{mime_type};base64,{data}"


def detect_mime_type(image_bytes: bytes) -> str:
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            mime_type = Image.MIME.get(img.format)
    except (UnidentifiedImageError, OSError):
        return DEFAULT_MIME_TYPE
    return mime_type or DEFAULT_MIME_TYPE


def bytes_to_data_uri(image_bytes: bytes, mime_type: str = None) -> str:
    """Encode raw image bytes (camera snapshot or uploaded file) as a data URI."""
    mime_type = mime_type or detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
