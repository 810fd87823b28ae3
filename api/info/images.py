"""
Card image helpers.

Uploaded card art is stored inline as a base64 data URL
(`data:<mime>;base64,<payload>`), so no file storage is needed.
"""

from __future__ import annotations

import base64
from pathlib import Path

from fastapi import HTTPException, UploadFile

from core import config

ALLOWED_IMAGE_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}

_EXTENSION_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}

DEFAULT_MAX_IMAGE_BYTES = 2 * 1024 * 1024  # 2 MiB


def max_image_bytes() -> int:
    value = config.env_int("MAX_IMAGE_BYTES", DEFAULT_MAX_IMAGE_BYTES)
    return value if value > 0 else DEFAULT_MAX_IMAGE_BYTES


def to_data_url(data: bytes, content_type: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{payload}"


def is_image_reference(value: str) -> bool:
    """
    Accept remote URLs and inline image data URLs.
    """
    value = (value or "").strip()
    if value.startswith(("http://", "https://", "/")):
        return True
    return value.startswith("data:image/") and ";base64," in value


def guess_content_type(filename: str, declared: str | None) -> str | None:
    declared = (declared or "").split(";", 1)[0].strip().lower()
    if declared in ALLOWED_IMAGE_TYPES:
        return declared
    return _EXTENSION_TYPES.get(Path(filename or "").suffix.lower())


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 256 * 1024
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"Image too large. Max is {max_bytes} bytes.",
            )

    return bytes(buf)


async def upload_to_data_url(file: UploadFile) -> str:
    content_type = guess_content_type(file.filename or "", file.content_type)
    if content_type is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported image type. Allowed: {sorted(ALLOWED_IMAGE_TYPES)}",
        )

    data = await read_upload_bytes(file, max_bytes=max_image_bytes())
    if not data:
        raise HTTPException(status_code=400, detail="Image file is empty.")
    return to_data_url(data, content_type)
