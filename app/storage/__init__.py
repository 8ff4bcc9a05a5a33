# Storage backends

from app.config import LOCAL_STORAGE_PATH, PUBLIC_FOLDER, UPLOAD_CHUNK_SIZE
from app.storage.base import StorageBackend
from app.storage.local_storage import LocalStorage

storage: StorageBackend = LocalStorage(
    LOCAL_STORAGE_PATH,
    public_folder=PUBLIC_FOLDER,
    chunk_size=UPLOAD_CHUNK_SIZE,
)


def get_storage() -> StorageBackend:
    """FastAPI dependency for the configured backend."""
    return storage


__all__ = ["storage", "get_storage", "StorageBackend", "LocalStorage"]
