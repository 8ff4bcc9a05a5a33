import logging
import mimetypes
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse, Response

from app.config import CORS_ORIGINS, LOG_LEVEL, PUBLIC_FOLDER
from app.core.errors import AssetNotFound
from app.routers import assets
from app.storage import LocalStorage, StorageBackend, get_storage
from app.storage.references import is_valid_storage_name

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = FastAPI(
    title="Asset Store API",
    description="Content-addressed storage for uploaded images",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(assets.router)


@app.get("/")
async def root():
    return {"message": "Asset Store API", "version": "0.1.0"}


# Uploaded files are client content: never let the browser run them as active content
ASSET_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; sandbox",
    "X-Content-Type-Options": "nosniff",
}


# References are /<PUBLIC_FOLDER>/<storage name>; serve them straight from the backend
@app.get(f"/{PUBLIC_FOLDER}/{{storage_name}}")
async def serve_asset(
    storage_name: str,
    backend: Annotated[StorageBackend, Depends(get_storage)],
):
    """Serve a stored asset. Name must be a single file inside the public folder."""
    if not is_valid_storage_name(storage_name):
        return PlainTextResponse("Forbidden", status_code=403)
    if isinstance(backend, LocalStorage):
        full_path = backend.path_for(storage_name)
        if not full_path.is_file():
            return PlainTextResponse("Not Found", status_code=404)
        return FileResponse(full_path, headers=ASSET_HEADERS)
    try:
        content = await backend.read(storage_name)
    except AssetNotFound:
        return PlainTextResponse("Not Found", status_code=404)
    media_type = mimetypes.guess_type(storage_name)[0] or "application/octet-stream"
    return Response(content, media_type=media_type, headers=ASSET_HEADERS)
