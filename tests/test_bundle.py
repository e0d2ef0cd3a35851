"""Tests for assembling article uploads."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from newsbundle.encoding.bundle import UploadBundle
from newsbundle.errors import ValidationError
from newsbundle.models import ArticleOptions

ARTICLE = {"version": "1.7", "identifier": "demo", "title": "Demo"}


def test_empty_bundle_has_article_and_metadata_in_order() -> None:
    bundle = UploadBundle(article=ARTICLE)

    parts = bundle.parts()

    assert [(p.name, p.filename) for p in parts] == [
        ("article.json", "article.json"),
        ("metadata", None),
    ]
    body = bundle.encode(boundary="B")
    assert body.buffer.count(b"--B\r\n") == 2
    assert body.buffer.index(b'name="article.json"') < body.buffer.index(b'name="metadata"')
    assert [p.content_type for p in body.parts] == ["application/json", "application/json"]


def test_article_and_metadata_are_serialised_compactly() -> None:
    bundle = UploadBundle(article={"title": "Café"}, options=ArticleOptions(is_sponsored=True))

    assert bundle.article_json() == '{"title":"Café"}'
    assert json.loads(bundle.metadata_json()) == {
        "data": {"isPreview": True, "isIssueOnly": False, "isSponsored": True}
    }
    assert bundle.metadata_json().startswith('{"data":{"isPreview":true')


def test_raw_article_text_is_sent_verbatim() -> None:
    text = '{\n  "title": "Kept as is"\n}\n'
    bundle = UploadBundle(article=text)
    assert bundle.parts()[0].text == text


def test_files_follow_in_insertion_order(png_file: Path, gif_file: Path) -> None:
    bundle = UploadBundle(article=ARTICLE, files={"b.gif": gif_file, "a.png": png_file})

    parts = bundle.parts()[2:]

    assert [(p.name, p.filename) for p in parts] == [("file0", "b.gif"), ("file1", "a.png")]
    body = bundle.encode()
    assert [p.content_type for p in body.parts[2:]] == ["image/gif", "image/png"]


@pytest.mark.parametrize("reserved", ["article.json", "metadata"])
def test_reserved_names_rejected_before_reading_files(tmp_path: Path, reserved: str) -> None:
    missing = tmp_path / "does-not-exist.png"
    with pytest.raises(ValidationError):
        UploadBundle(article=ARTICLE, files={reserved: missing})


def test_missing_article_is_rejected() -> None:
    with pytest.raises(ValidationError):
        UploadBundle(article=None)  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        UploadBundle(article="   ")
    with pytest.raises(ValidationError):
        UploadBundle(article=["not", "an", "object"])  # type: ignore[arg-type]


def test_file_locations_must_be_paths() -> None:
    with pytest.raises(ValidationError):
        UploadBundle(article=ARTICLE, files={"image.png": 42})  # type: ignore[dict-item]
