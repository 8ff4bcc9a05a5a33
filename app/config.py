"""Application configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env so LOCAL_STORAGE_PATH and friends can live next to the app
load_dotenv()

# Root directory for stored assets; files land in LOCAL_STORAGE_PATH/PUBLIC_FOLDER
LOCAL_STORAGE_PATH = Path(os.getenv("LOCAL_STORAGE_PATH", "uploads")).resolve()

# Public path segment in references, e.g. /user-content/<uuid>.png
PUBLIC_FOLDER = os.getenv("PUBLIC_FOLDER", "user-content").strip("/")

# Upload limits (bytes)
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 10 * 1024 * 1024))  # 10 MB
UPLOAD_CHUNK_SIZE = int(os.getenv("UPLOAD_CHUNK_SIZE", 64 * 1024))  # 64 KiB

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]
