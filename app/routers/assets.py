"""Asset API: store, replace and delete uploaded images."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from app.config import MAX_UPLOAD_SIZE, UPLOAD_CHUNK_SIZE
from app.core.errors import IOFailure, UploadFailure
from app.core.upload_validation import validate_upload
from app.schemas.asset import AssetResponse
from app.services.asset_uploads import AssetUploadCoordinator
from app.storage import StorageBackend, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])


def get_asset_uploads(
    backend: Annotated[StorageBackend, Depends(get_storage)],
) -> AssetUploadCoordinator:
    return AssetUploadCoordinator(backend, max_bytes=MAX_UPLOAD_SIZE, chunk_size=UPLOAD_CHUNK_SIZE)


def _check_upload(upload_file: UploadFile) -> str:
    """Reject uploads without a filename or with a non-image type. Returns the image kind."""
    if not upload_file.filename:
        raise HTTPException(status_code=400, detail="Filename is required")
    kind, err = validate_upload(
        upload_file.filename,
        upload_file.content_type,
        size=upload_file.size,
        max_size=MAX_UPLOAD_SIZE,
    )
    if err or kind is None:
        raise HTTPException(status_code=400, detail=err or "Unsupported file type")
    return kind


def _to_response(uploads: AssetUploadCoordinator, reference: str, kind: str | None) -> AssetResponse:
    return AssetResponse(
        reference=reference,
        storageName=uploads.backend.storage_name_for(reference) or "",
        kind=kind,
    )


async def _store(uploads: AssetUploadCoordinator, upload_file: UploadFile, old_reference: str | None = None) -> str:
    """Run store/replace and map storage errors onto HTTP errors."""
    try:
        if old_reference is None:
            return await uploads.store(upload_file, upload_file.filename or "")
        return await uploads.replace(old_reference, upload_file, upload_file.filename or "")
    except UploadFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IOFailure:
        logger.exception("Storage write failed for %s", upload_file.filename)
        raise HTTPException(status_code=500, detail="Could not store file")


@router.post("", response_model=AssetResponse, status_code=201)
async def upload_asset(
    uploads: Annotated[AssetUploadCoordinator, Depends(get_asset_uploads)],
    file: UploadFile = File(...),
) -> AssetResponse:
    """Store an uploaded image and return the reference to persist on the owning record."""
    kind = _check_upload(file)
    reference = await _store(uploads, file)
    return _to_response(uploads, reference, kind)


@router.put("", response_model=AssetResponse)
async def replace_asset(
    uploads: Annotated[AssetUploadCoordinator, Depends(get_asset_uploads)],
    reference: str = Form(""),
    file: UploadFile = File(...),
) -> AssetResponse:
    """Delete the asset behind reference (if any) and store the new upload in its place."""
    kind = _check_upload(file)
    new_reference = await _store(uploads, file, old_reference=reference)
    return _to_response(uploads, new_reference, kind)


@router.delete("", status_code=204)
async def delete_asset(
    uploads: Annotated[AssetUploadCoordinator, Depends(get_asset_uploads)],
    reference: str = Query(..., description="Reference returned when the asset was stored"),
) -> None:
    """Delete an asset by reference. Deleting an absent asset is not an error."""
    try:
        await uploads.delete_by_reference(reference)
    except IOFailure:
        logger.exception("Storage delete failed for %s", reference)
        raise HTTPException(status_code=500, detail="Could not delete file")
