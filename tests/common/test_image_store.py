from __future__ import annotations

import io

import pytest
from PIL import Image

from hr_attendance.core.exceptions import ValidationError
from hr_attendance.storage.image_store import LocalImageStore, compress_to_jpeg


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (32, 24), (200, 30, 30, 128)).save(buf, format="PNG")
    return buf.getvalue()


def test_compress_reencodes_as_jpeg():
    out = compress_to_jpeg(_png_bytes())

    assert out[:2] == b"\xff\xd8"
    assert Image.open(io.BytesIO(out)).size == (32, 24)


def test_compress_rejects_non_images():
    with pytest.raises(ValidationError, match="valid Image"):
        compress_to_jpeg(b"definitely not an image")


def test_local_store_writes_file_and_builds_url(tmp_path):
    store = LocalImageStore(tmp_path, "https://example.com/media/")

    result = store.upload(b"data", "attendance/1_7.jpeg")

    assert result.ok
    assert (tmp_path / "attendance" / "1_7.jpeg").read_bytes() == b"data"
    assert store.url_for("attendance/1_7.jpeg") == "https://example.com/media/attendance/1_7.jpeg"


def test_local_store_reports_write_failure(tmp_path):
    blocker = tmp_path / "attendance"
    blocker.write_bytes(b"")  # a file where a directory is needed
    store = LocalImageStore(tmp_path, "/media")

    result = store.upload(b"data", "attendance/1_7.jpeg")

    assert not result.ok
    assert result.error
