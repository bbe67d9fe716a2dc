"""
Upload storage for post covers.
Writes each uploaded file under the upload directory and renames it so it
carries the original file's extension; the resulting path is the post cover.
"""

import logging
import os
import uuid
from typing import Optional

import aiofiles
from fastapi import UploadFile

logger = logging.getLogger('blogapi.uploads')

CHUNK_SIZE = 1024 * 1024


def original_extension(filename: Optional[str]) -> Optional[str]:
    """Text after the last '.' of the original name, or None if there is none."""
    if not filename or '.' not in filename:
        return None
    ext = filename.rsplit('.', 1)[1]
    # only the name part is kept, never a path fragment
    ext = ext.replace('/', '').replace('\\', '')
    return ext or None


class UploadStorage:
    """Stores one uploaded file per request on local disk"""

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    def ensure_dir(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    def temp_path(self) -> str:
        return os.path.join(self.upload_dir, uuid.uuid4().hex)

    async def store(self, file: UploadFile) -> str:
        """Save the upload and return its durable path"""
        self.ensure_dir()
        temp_path = self.temp_path()
        try:
            async with aiofiles.open(temp_path, 'wb') as f:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    await f.write(chunk)
        except Exception:
            # Clean up partial file if it was created
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        ext = original_extension(file.filename)
        if ext is None:
            return temp_path
        new_path = f'{temp_path}.{ext}'
        os.rename(temp_path, new_path)
        logger.info({'msg': 'upload_stored', 'path': new_path, 'original': file.filename})
        return new_path

    def discard(self, path: Optional[str]) -> bool:
        """Best-effort removal of a stored file"""
        if not path:
            return False
        try:
            if os.path.exists(path):
                os.remove(path)
                return True
            return False
        except OSError as e:
            logger.warning({'msg': 'upload_cleanup_failed', 'path': path, 'error': str(e)})
            return False
