"""Pydantic schemas for the asset API."""

from pydantic import BaseModel


class AssetResponse(BaseModel):
    """A stored asset as returned by the API."""

    reference: str
    storageName: str
    kind: str | None = None
