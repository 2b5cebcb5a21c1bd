"""
Disk storage for uploaded images. The rest of the system only ever sees the returned URL.
"""

import random
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Optional

from .config import UPLOAD_DIR, UPLOAD_URL_PREFIX
from ..util.logging import logger


class UploadStorage:
    def __init__(self, upload_dir=UPLOAD_DIR, url_prefix: str = UPLOAD_URL_PREFIX):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def ensure_directory(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def unique_name(original_name: Optional[str]) -> str:
        """<epoch millis>-<random><original extension>"""
        suffix = Path(original_name or "").suffix
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"

    def save(self, original_name: Optional[str], source: BinaryIO) -> str:
        """Copy an uploaded file under the upload directory and return its public URL."""
        self.ensure_directory()
        name = self.unique_name(original_name)
        destination = self.upload_dir / name
        with open(destination, "wb") as out:
            shutil.copyfileobj(source, out)

        url = f"{self.url_prefix}/{name}"
        logger.log_upload(original_name or name, url, destination.stat().st_size)
        return url
