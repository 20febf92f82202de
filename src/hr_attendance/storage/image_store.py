from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError

from ..core.constants import IMAGE_JPEG_QUALITY
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    ok: bool
    error: Optional[str] = None


class ImageStore(Protocol):
    """Where check-in photos go. Only check-in and the day formatter use it."""

    def compress(self, data: bytes) -> bytes:
        raise NotImplementedError

    def upload(self, data: bytes, path: str) -> UploadResult:
        raise NotImplementedError

    def url_for(self, path: str) -> str:
        raise NotImplementedError


def compress_to_jpeg(data: bytes, *, quality: int = IMAGE_JPEG_QUALITY) -> bytes:
    """Re-encode any Pillow-readable image as a progressive JPEG."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Please upload a valid Image file.") from None

    buf = io.BytesIO()
    img.convert("RGB").save(buf, format="JPEG", quality=quality, progressive=True, optimize=True)
    return buf.getvalue()


class LocalImageStore(ImageStore):
    """Stores images below ``upload_dir`` and serves them from ``public_url``."""

    def __init__(self, upload_dir: str | Path, public_url: str):
        self._root = Path(upload_dir)
        self._public_url = public_url.rstrip("/")

    def compress(self, data: bytes) -> bytes:
        return compress_to_jpeg(data)

    def upload(self, data: bytes, path: str) -> UploadResult:
        target = self._root / path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error("Image upload to %s failed: %s", target, e)
            return UploadResult(ok=False, error=str(e))
        return UploadResult(ok=True)

    def url_for(self, path: str) -> str:
        return f"{self._public_url}/{path.lstrip('/')}"
