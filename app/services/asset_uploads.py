"""Turn inbound uploads into stored assets and references, and back."""

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing

from app.core.errors import AssetNotFound, StorageError, UploadFailure
from app.storage.base import StorageBackend
from app.storage.references import generate_storage_name, split_extension
from app.storage.streams import DEFAULT_CHUNK_SIZE, ByteStream, iter_chunks

logger = logging.getLogger(__name__)


class AssetUploadCoordinator:
    """
    Sits between the application and a StorageBackend.

    Every stored asset gets a fresh uuid4 storage name carrying only the
    extension of the client-declared filename, so concurrent uploads never
    share a slot. Callers persist the returned reference on their own record
    and hand it back to delete or replace the asset.
    """

    def __init__(
        self,
        backend: StorageBackend,
        max_bytes: int | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.backend = backend
        self.max_bytes = max_bytes
        self.chunk_size = chunk_size

    async def store(self, stream: ByteStream, declared_name: str) -> str:
        """
        Persist stream under a new storage name and return its reference.
        Raises UploadFailure for an empty, unreadable or oversized stream;
        IOFailure from the backend propagates.
        """
        storage_name = generate_storage_name(split_extension(declared_name or ""))
        async with aclosing(iter_chunks(stream, self.chunk_size)) as chunks:
            # Pull the first chunk before touching the backend
            try:
                first = await anext(chunks)
            except StopAsyncIteration:
                raise UploadFailure("Upload is empty") from None
            except StorageError:
                raise
            except Exception as e:
                raise UploadFailure(f"Upload stream could not be read: {e}") from e
            await self.backend.write(storage_name, self._guarded(first, chunks))
        reference = self.backend.resolve_reference(storage_name)
        logger.info("Stored %s as %s", declared_name, reference)
        return reference

    async def delete_by_reference(self, reference: str | None) -> bool:
        """
        Remove the asset behind reference. Returns True if a file was deleted.
        Empty references are a no-op; references the backend does not
        recognise are logged and treated as already deleted.
        """
        if not reference:
            return False
        storage_name = self.backend.storage_name_for(reference)
        if storage_name is None:
            logger.warning("Ignoring delete of unrecognised asset reference: %s", reference[:200])
            return False
        removed = await self.backend.remove(storage_name)
        if removed:
            logger.info("Deleted asset %s", reference)
        else:
            logger.debug("Asset already absent: %s", reference)
        return removed

    async def replace(self, old_reference: str | None, stream: ByteStream, declared_name: str) -> str:
        """
        Swap an owning record's asset: delete the old one, then store the new one.
        Not atomic: if store fails the old asset is already gone.
        """
        await self.delete_by_reference(old_reference)
        return await self.store(stream, declared_name)

    async def read_by_reference(self, reference: str) -> bytes:
        storage_name = self.backend.storage_name_for(reference) if reference else None
        if storage_name is None:
            raise AssetNotFound(f"Not an asset reference: {reference!r}")
        return await self.backend.read(storage_name)

    async def _guarded(self, first: bytes, chunks: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
        """Re-yield the stream, enforcing max_bytes and reporting read errors as UploadFailure."""
        total = 0
        chunk = first
        while True:
            total += len(chunk)
            if self.max_bytes is not None and total > self.max_bytes:
                raise UploadFailure(f"Upload exceeds {self.max_bytes} bytes")
            yield chunk
            try:
                chunk = await anext(chunks)
            except StopAsyncIteration:
                return
            except StorageError:
                raise
            except Exception as e:
                raise UploadFailure(f"Upload stream failed mid-transfer: {e}") from e
