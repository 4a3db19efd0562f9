"""
Storage for uploaded files. Files are written to a local directory under a
random name and addressed by ``local://`` URLs.
"""

import logging
from pathlib import Path
from uuid import uuid4

from fastapi import Request

logger = logging.getLogger(__name__)

LOCAL_SCHEME = "local://"


class FileStorage:
    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    def save(self, content: bytes, original_filename: str) -> str:
        """Write ``content`` to the upload directory and return its URL."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = Path(original_filename).suffix or ".csv"
        path = self.upload_dir / f"{uuid4()}{suffix}"
        path.write_bytes(content)
        logger.info(f"Stored upload {original_filename} as {path}")
        return f"{LOCAL_SCHEME}{path}"


def get_file_storage(request: Request) -> FileStorage:
    return request.app.state.file_storage
