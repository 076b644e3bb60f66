"""
Photo Service - Stores uploaded report photos on disk
"""
import logging
import re
import secrets
import time
from pathlib import Path
from typing import List, Optional, Sequence

from fastapi import UploadFile

from reportit.config import get_settings
from reportit.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


class PhotoService:
    """Validates image uploads and writes them under the uploads directory"""

    def __init__(self, uploads_path: Optional[str] = None):
        settings = get_settings()
        self.uploads_dir = Path(uploads_path or settings.uploads_path)
        self.max_bytes = settings.max_upload_size_mb * 1024 * 1024
        self.max_files = settings.max_photos_per_report

    @staticmethod
    def _unique_filename(original: str) -> str:
        """Timestamp plus random hex, keeping a sanitized extension"""
        extension = Path(original or "").suffix.lower()
        extension = re.sub(r"[^\w\.]", "", extension)
        return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{extension}"

    async def save_photos(self, files: Sequence[UploadFile]) -> List[str]:
        """Validate every file first, then store them and return their URLs"""
        files = [f for f in files if f is not None and f.filename]
        if len(files) > self.max_files:
            raise InvalidInputError(f"At most {self.max_files} photos are allowed")

        contents = []
        for upload in files:
            if not (upload.content_type or "").startswith("image/"):
                raise InvalidInputError("Only image files are allowed")
            content = await upload.read()
            if len(content) > self.max_bytes:
                raise InvalidInputError("Photo exceeds the maximum upload size")
            contents.append((upload.filename, content))

        if not contents:
            return []

        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        urls = []
        for filename, content in contents:
            stored_name = self._unique_filename(filename)
            with open(self.uploads_dir / stored_name, "wb") as f:
                f.write(content)
            urls.append(f"{UPLOADS_URL_PREFIX}/{stored_name}")

        logger.info("Stored %d photo(s) in %s", len(urls), self.uploads_dir)
        return urls
