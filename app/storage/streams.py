"""Adapt the inbound upload shapes we accept into one async chunk iterator."""

import inspect
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import Any, Protocol, Union

DEFAULT_CHUNK_SIZE = 64 * 1024


class SupportsRead(Protocol):
    def read(self, size: int) -> Any: ...


# read() may be sync (BytesIO) or async (UploadFile, aiofiles handles)
ByteStream = Union[bytes, bytearray, memoryview, SupportsRead, AsyncIterable[bytes], Iterable[bytes]]


async def iter_chunks(source: ByteStream, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield non-empty byte chunks from source until it is exhausted."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        for start in range(0, len(data), chunk_size):
            yield data[start:start + chunk_size]
        return
    read = getattr(source, "read", None)
    if callable(read):
        while True:
            chunk = read(chunk_size)
            if inspect.isawaitable(chunk):
                chunk = await chunk
            if not chunk:
                return
            yield bytes(chunk)
    elif isinstance(source, AsyncIterable):
        async for chunk in source:
            if chunk:
                yield bytes(chunk)
    elif isinstance(source, Iterable) and not isinstance(source, str):
        for chunk in source:
            if chunk:
                yield bytes(chunk)
    else:
        raise TypeError(f"Unsupported upload stream type: {type(source).__name__}")
