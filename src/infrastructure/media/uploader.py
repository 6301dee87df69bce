# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bounded parallel media uploads to the local media root.

Files of one request are written concurrently, at most
``max_concurrent`` at a time. Each file is streamed in ``chunk_size``
pieces with its own byte counter. Uploads are best effort: a file that fails
or exceeds ``max_bytes`` is reported in its ``UploadOutcome`` and the other
files are still written. Setting the shared cancel event stops files that
have not finished yet; files already written stay in place.

Example:
    uploader = MediaUploader.from_settings(settings.media)
    outcomes = await uploader.upload_all("listings/abc", files)
    stored = [o for o in outcomes if o.succeeded]
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol

import aiofiles
import aiofiles.os

from src.core.config.settings import MediaSettings
from src.infrastructure.database.models import new_id

logger = logging.getLogger(__name__)


class UploadSource(Protocol):
    """Readable upload, satisfied by ``fastapi.UploadFile``."""

    filename: Optional[str]
    content_type: Optional[str]

    async def read(self, size: int = -1) -> bytes: ...


@dataclass
class UploadOutcome:
    """Result of uploading one file.

    Attributes:
        file_name: Name the client sent.
        url: Public URL of the stored file, None on failure.
        size: Bytes written.
        error: Failure reason, None on success.
    """

    file_name: str
    content_type: Optional[str] = None
    url: Optional[str] = None
    size: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class UploadCancelled(Exception):
    """Raised inside an upload task when the cancel event is set."""


class UploadTooLarge(Exception):
    """Raised inside an upload task when a file exceeds the size limit."""


class MediaUploader:
    """Writes uploads below ``root`` and maps them to URLs below ``base_url``."""

    def __init__(
        self,
        root: str | Path,
        base_url: str,
        max_bytes: int,
        max_concurrent: int = 4,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes
        self.max_concurrent = max(1, max_concurrent)
        self.chunk_size = chunk_size

    @classmethod
    def from_settings(cls, settings: MediaSettings) -> "MediaUploader":
        return cls(
            root=settings.root,
            base_url=settings.base_url,
            max_bytes=settings.max_upload_bytes,
            max_concurrent=settings.max_concurrent_uploads,
            chunk_size=settings.chunk_size,
        )

    async def upload_all(
        self,
        folder: str,
        files: Sequence[UploadSource],
        cancel: asyncio.Event | None = None,
    ) -> list[UploadOutcome]:
        """Upload ``files`` into ``folder`` with bounded concurrency.

        Args:
            folder: Relative folder below the media root.
            files: Uploads to store.
            cancel: Shared event; once set, pending and running uploads stop.

        Returns:
            One outcome per file, in input order.
        """
        cancel = cancel or asyncio.Event()
        semaphore = asyncio.Semaphore(self.max_concurrent)
        target = self.root / folder
        await aiofiles.os.makedirs(target, exist_ok=True)

        async def bounded(upload: UploadSource) -> UploadOutcome:
            async with semaphore:
                return await self._upload_one(folder, target, upload, cancel)

        return list(await asyncio.gather(*(bounded(f) for f in files)))

    async def _upload_one(
        self,
        folder: str,
        target: Path,
        upload: UploadSource,
        cancel: asyncio.Event,
    ) -> UploadOutcome:
        file_name = PurePosixPath(upload.filename or "upload").name
        outcome = UploadOutcome(file_name=file_name, content_type=upload.content_type)
        if cancel.is_set():
            outcome.error = f"Upload of '{file_name}' was cancelled."
            return outcome

        stored_name = f"{new_id()}{PurePosixPath(file_name).suffix.lower()}"
        path = target / stored_name
        written = 0
        try:
            async with aiofiles.open(path, "wb") as out:
                while chunk := await upload.read(self.chunk_size):
                    if cancel.is_set():
                        raise UploadCancelled
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise UploadTooLarge
                    await out.write(chunk)
                    logger.debug("Upload %s: %d bytes written", file_name, written)
        except UploadCancelled:
            outcome.error = f"Upload of '{file_name}' was cancelled."
        except UploadTooLarge:
            outcome.error = (
                f"File '{file_name}' exceeds the maximum upload size of {self.max_bytes} bytes."
            )
        except OSError as e:
            logger.warning("Upload of %s failed: %s", file_name, e)
            outcome.error = f"Upload of '{file_name}' failed: {e}"

        if outcome.error is not None:
            await self._discard(path)
            return outcome

        outcome.size = written
        outcome.url = f"{self.base_url}/{folder}/{stored_name}"
        logger.info("Stored upload %s as %s (%d bytes)", file_name, outcome.url, written)
        return outcome

    def path_for(self, url: str) -> Path | None:
        """Map a public URL back to its file, None for foreign URLs."""
        prefix = f"{self.base_url}/"
        if not url.startswith(prefix):
            return None
        relative = PurePosixPath(url[len(prefix):])
        if ".." in relative.parts:
            return None
        return self.root.joinpath(*relative.parts)

    async def remove(self, url: str) -> bool:
        """Delete the file behind ``url``. Returns False when nothing was removed."""
        path = self.path_for(url)
        if path is None:
            return False
        return await self._discard(path)

    @staticmethod
    async def _discard(path: Path) -> bool:
        try:
            await aiofiles.os.remove(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Could not remove %s: %s", path, e)
            return False
