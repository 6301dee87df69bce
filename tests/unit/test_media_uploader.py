# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the bounded parallel media uploader."""

import asyncio
import io
from pathlib import Path

import pytest

from src.core.config.settings import MediaSettings
from src.infrastructure.media import MediaUploader


class FakeUpload:
    """In-memory upload with the ``UploadFile`` read interface."""

    def __init__(self, filename: str, content: bytes, content_type: str = "image/png") -> None:
        self.filename = filename
        self.content_type = content_type
        self._buffer = io.BytesIO(content)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


@pytest.fixture
def uploader(tmp_path: Path) -> MediaUploader:
    """Create an uploader rooted in a temporary directory."""
    return MediaUploader(tmp_path, "/media/", max_bytes=16, max_concurrent=2, chunk_size=4)


class TestUploadAll:
    """Tests for MediaUploader.upload_all."""

    @pytest.mark.asyncio
    async def test_stores_files(self, uploader: MediaUploader, tmp_path: Path) -> None:
        """Test that every file is written and mapped to a URL."""
        files = [FakeUpload("a.PNG", b"abcdefgh"), FakeUpload("b.jpg", b"xyz", "image/jpeg")]

        outcomes = await uploader.upload_all("listings/b1", files)

        assert [o.file_name for o in outcomes] == ["a.PNG", "b.jpg"]
        assert all(o.succeeded for o in outcomes)
        assert outcomes[0].url.startswith("/media/listings/b1/")
        assert outcomes[0].url.endswith(".png")
        assert outcomes[0].size == 8
        stored = uploader.path_for(outcomes[0].url)
        assert stored is not None
        assert stored.read_bytes() == b"abcdefgh"
        assert stored.parent == tmp_path / "listings" / "b1"

    @pytest.mark.asyncio
    async def test_oversized_file_is_rejected(self, uploader: MediaUploader, tmp_path: Path) -> None:
        """Test that a file over the limit fails alone and leaves nothing behind."""
        files = [FakeUpload("big.png", b"x" * 20), FakeUpload("ok.png", b"ok")]

        outcomes = await uploader.upload_all("listings/b1", files)

        assert outcomes[0].error == "File 'big.png' exceeds the maximum upload size of 16 bytes."
        assert outcomes[0].url is None
        assert outcomes[1].succeeded is True
        assert len(list((tmp_path / "listings" / "b1").iterdir())) == 1

    @pytest.mark.asyncio
    async def test_cancelled_uploads(self, uploader: MediaUploader) -> None:
        """Test that a set cancel event stops every pending upload."""
        cancel = asyncio.Event()
        cancel.set()

        outcomes = await uploader.upload_all("listings/b1", [FakeUpload("a.png", b"a")], cancel)

        assert outcomes[0].error == "Upload of 'a.png' was cancelled."

    @pytest.mark.asyncio
    async def test_client_path_is_stripped(self, uploader: MediaUploader) -> None:
        """Test that only the base name of the client file is kept."""
        outcomes = await uploader.upload_all("x", [FakeUpload("../../etc/passwd.txt", b"a")])

        assert outcomes[0].file_name == "passwd.txt"
        assert outcomes[0].url.startswith("/media/x/")


class TestRemove:
    """Tests for MediaUploader.remove and path_for."""

    @pytest.mark.asyncio
    async def test_remove_stored_file(self, uploader: MediaUploader) -> None:
        """Test that a stored file can be removed by URL."""
        [outcome] = await uploader.upload_all("listings/b1", [FakeUpload("a.png", b"a")])

        assert await uploader.remove(outcome.url) is True
        assert await uploader.remove(outcome.url) is False

    @pytest.mark.parametrize(
        "url",
        ["https://cdn.example.com/a.png", "/media/../secrets.txt", "/other/a.png"],
    )
    def test_path_for_rejects_foreign_urls(self, uploader: MediaUploader, url: str) -> None:
        """Test that URLs outside the media root are not mapped."""
        assert uploader.path_for(url) is None

    def test_from_settings(self) -> None:
        """Test construction from media settings."""
        uploader = MediaUploader.from_settings(
            MediaSettings(root="/srv/media", base_url="/files", max_concurrent_uploads=0)
        )

        assert uploader.base_url == "/files"
        assert uploader.max_concurrent == 1
        assert uploader.path_for("/files/a/b.png") == Path("/srv/media/a/b.png")
