"""Declared-type checks for image uploads."""

from typing import Literal

# Image kinds accepted by the upload API (no SVG: it can carry script)
ImageKind = Literal["jpeg", "png", "gif", "webp", "heic", "bmp"]

MIME_TO_KIND: dict[str, ImageKind] = {
    "image/jpeg": "jpeg",
    "image/pjpeg": "jpeg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/heic": "heic",
    "image/bmp": "bmp",
}

EXT_TO_KIND: dict[str, ImageKind] = {
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".png": "png",
    ".gif": "gif",
    ".webp": "webp",
    ".heic": "heic",
    ".bmp": "bmp",
}


def format_size(size: int) -> str:
    """Human-readable byte count: 10 MB, 512 KB, 300 bytes."""
    if size >= 1024 * 1024:
        return f"{size // (1024*1024)} MB"
    if size >= 1024:
        return f"{size // 1024} KB"
    return f"{size} bytes"


def detect_image_kind(filename: str, content_type: str | None) -> ImageKind | None:
    """Determine image kind from content_type, falling back to the filename extension."""
    if content_type:
        base_type = content_type.split(";")[0].strip().lower()
        if base_type in MIME_TO_KIND:
            return MIME_TO_KIND[base_type]
    ext = "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return EXT_TO_KIND.get(ext)


def validate_upload(
    filename: str,
    content_type: str | None,
    size: int | None = None,
    max_size: int | None = None,
) -> tuple[ImageKind | None, str | None]:
    """
    Validate an upload and return (image_kind, error_message).
    If valid, error_message is None. size may be unknown until the body is streamed.
    """
    kind = detect_image_kind(filename, content_type)
    if not kind:
        return None, "Unsupported file type. Allowed: JPEG, PNG, GIF, WebP, HEIC, BMP."
    if size is not None and max_size is not None and size > max_size:
        return kind, f"File too large. Max size: {format_size(max_size)}"
    return kind, None
