"""Abstract storage backend."""

from abc import ABC, abstractmethod

from app.storage.streams import ByteStream


class StorageBackend(ABC):
    """Interface for asset storage. Knows storage names, not the records that own them."""

    @abstractmethod
    def resolve_reference(self, storage_name: str) -> str:
        """Public reference for a storage name. Pure; never fails."""
        ...

    @abstractmethod
    def storage_name_for(self, reference: str) -> str | None:
        """Inverse of resolve_reference. None for references this backend did not produce."""
        ...

    @abstractmethod
    async def write(self, storage_name: str, stream: ByteStream) -> None:
        """
        Store the full contents of stream under storage_name, replacing any existing asset.
        Must not return before all bytes are durable, and must leave nothing
        behind if the copy fails.
        """
        ...

    @abstractmethod
    async def remove(self, storage_name: str) -> bool:
        """Remove the asset. Returns False if it did not exist (not an error)."""
        ...

    @abstractmethod
    async def read(self, storage_name: str) -> bytes:
        """Return stored bytes; raises AssetNotFound if absent."""
        ...

    @abstractmethod
    async def exists(self, storage_name: str) -> bool:
        ...
