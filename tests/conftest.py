from __future__ import annotations

from pathlib import Path

import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + b"\x00" * 17
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 16
GIF_BYTES = b"GIF89a" + b"\x01\x00\x01\x00" + b"\x00" * 16
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<>>\nendobj\n"

SECRET = "c2VjcmV0LWtleQ=="  # base64 of "secret-key"


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "photo.jpg"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def gif_file(tmp_path: Path) -> Path:
    path = tmp_path / "anim.gif"
    path.write_bytes(GIF_BYTES)
    return path


@pytest.fixture
def pdf_file(tmp_path: Path) -> Path:
    path = tmp_path / "brochure.pdf"
    path.write_bytes(PDF_BYTES)
    return path
