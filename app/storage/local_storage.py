"""Local filesystem storage."""

import asyncio
import logging
import os
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os

from app.core.errors import AssetNotFound, InvalidStorageName, IOFailure, StorageError
from app.storage.base import StorageBackend
from app.storage.references import decode_reference, encode_reference, is_valid_storage_name
from app.storage.streams import DEFAULT_CHUNK_SIZE, ByteStream, iter_chunks

logger = logging.getLogger(__name__)

_fsync = aiofiles.os.wrap(os.fsync)


def _sync_directory(path: Path) -> None:
    """fsync a directory so a rename inside it survives a crash."""
    fd = os.open(path, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


_fsync_directory = aiofiles.os.wrap(_sync_directory)


class LocalStorage(StorageBackend):
    """
    Store assets flat on local disk under root/public_folder.
    References are root-relative paths like /user-content/<uuid>.png.
    """

    def __init__(
        self,
        root: str | Path,
        public_folder: str = "user-content",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        folder = public_folder.strip("/")
        if not is_valid_storage_name(folder):
            raise ValueError(f"Invalid public folder: {public_folder!r}")
        self.root = Path(root).resolve()
        self.public_folder = folder
        self.directory = self.root / folder
        self.chunk_size = chunk_size

    def path_for(self, storage_name: str) -> Path:
        """Absolute path of a stored asset. Rejects names that would leave the directory."""
        if not is_valid_storage_name(storage_name):
            raise InvalidStorageName(f"Invalid storage name: {storage_name!r}")
        return self.directory / storage_name

    def resolve_reference(self, storage_name: str) -> str:
        return encode_reference(self.public_folder, storage_name)

    def storage_name_for(self, reference: str) -> str | None:
        return decode_reference(self.public_folder, reference)

    async def write(self, storage_name: str, stream: ByteStream) -> None:
        target = self.path_for(storage_name)
        # Same directory as the target so the final rename stays atomic
        tmp = self.directory / f".{uuid.uuid4().hex}.part"
        try:
            await aiofiles.os.makedirs(self.directory, exist_ok=True)
        except OSError as e:
            raise IOFailure(f"Cannot create storage directory {self.directory}: {e}") from e

        size = 0
        try:
            async with aiofiles.open(tmp, "wb") as f:
                async for chunk in iter_chunks(stream, self.chunk_size):
                    await f.write(chunk)
                    size += len(chunk)
                await f.flush()
                await _fsync(f.fileno())
            await aiofiles.os.replace(tmp, target)
        except (StorageError, asyncio.CancelledError):
            self._discard(tmp)
            raise
        except OSError as e:
            self._discard(tmp)
            raise IOFailure(f"Failed to write {storage_name}: {e}") from e
        except Exception as e:
            self._discard(tmp)
            raise IOFailure(f"Upload stream failed while writing {storage_name}: {e}") from e

        try:
            await _fsync_directory(self.directory)
        except OSError as e:
            self._discard(target)
            raise IOFailure(f"Failed to commit {storage_name}: {e}") from e
        logger.debug("Wrote %s (%d bytes)", target, size)

    async def remove(self, storage_name: str) -> bool:
        path = self.path_for(storage_name)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise IOFailure(f"Failed to remove {storage_name}: {e}") from e
        return True

    async def read(self, storage_name: str) -> bytes:
        path = self.path_for(storage_name)
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise AssetNotFound(f"No asset named {storage_name}") from e
        except OSError as e:
            raise IOFailure(f"Failed to read {storage_name}: {e}") from e

    async def exists(self, storage_name: str) -> bool:
        return await aiofiles.os.path.isfile(self.path_for(storage_name))

    def _discard(self, path: Path) -> None:
        """Drop a partially written or uncommitted file. Sync so it still runs while a task is being cancelled."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial upload %s: %s", path, e)
