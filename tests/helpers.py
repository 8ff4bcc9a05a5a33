"""Upload streams and inspection helpers used across the test modules."""

import asyncio

from app.core.errors import AssetNotFound
from app.storage.base import StorageBackend
from app.storage.local_storage import LocalStorage
from app.storage.references import decode_reference, encode_reference
from app.storage.streams import iter_chunks


def stored_files(storage: LocalStorage) -> list[str]:
    """Names of everything in the backend's directory, temp files included."""
    if not storage.directory.exists():
        return []
    return sorted(p.name for p in storage.directory.iterdir())


async def chunks_then_error(*chunks: bytes, error: BaseException | None = None):
    """Async stream that yields chunks and then raises error."""
    for chunk in chunks:
        yield chunk
    raise error or OSError("connection reset by peer")


class BrokenReader:
    """File-like object whose read always fails."""

    def read(self, size: int = -1) -> bytes:
        raise OSError("device not ready")


class AsyncReader:
    """Minimal async file-like object, shaped like an UploadFile."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    async def read(self, size: int = -1) -> bytes:
        await asyncio.sleep(0)
        if size < 0:
            size = len(self._data) - self._pos
        chunk = self._data[self._pos:self._pos + size]
        self._pos += len(chunk)
        return chunk


class MemoryStorage(StorageBackend):
    """Dict-backed StorageBackend, for code paths that must not assume a local disk."""

    def __init__(self, public_folder: str = "user-content") -> None:
        self.public_folder = public_folder
        self.files: dict[str, bytes] = {}

    def resolve_reference(self, storage_name: str) -> str:
        return encode_reference(self.public_folder, storage_name)

    def storage_name_for(self, reference: str) -> str | None:
        return decode_reference(self.public_folder, reference)

    async def write(self, storage_name: str, stream) -> None:
        self.files[storage_name] = b"".join([chunk async for chunk in iter_chunks(stream)])

    async def remove(self, storage_name: str) -> bool:
        return self.files.pop(storage_name, None) is not None

    async def read(self, storage_name: str) -> bytes:
        try:
            return self.files[storage_name]
        except KeyError:
            raise AssetNotFound(storage_name) from None

    async def exists(self, storage_name: str) -> bool:
        return storage_name in self.files
