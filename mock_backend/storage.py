"""Flat on-disk storage for uploaded images."""
import base64
import binascii
import logging
import os
import re
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from .errors import BadUpload, NotFound

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif")
DATA_URI_RE = re.compile(r"^data:image/(\w+);base64,(.+)$", re.DOTALL)


def unique_name(extension: str) -> str:
    """Time-derived filename; the random suffix keeps same-millisecond uploads apart."""
    stamp = int(time.time() * 1000)
    return f"{stamp}-{uuid.uuid4().hex[:8]}{extension}"


class FileStore:
    def __init__(self, root: str):
        self.root = Path(root)

    def _write(self, extension: str, data: bytes) -> str:
        self.root.mkdir(parents=True, exist_ok=True)
        filename = unique_name(extension)
        (self.root / filename).write_bytes(data)
        logger.info("stored upload %s (%d bytes)", filename, len(data))
        return filename

    def save_upload(self, content_type: Optional[str], original_name: Optional[str], stream: BinaryIO) -> str:
        # reject before reading any bytes
        if content_type not in ALLOWED_MIME_TYPES:
            raise BadUpload("Only images are allowed (jpeg, png, gif)")
        extension = os.path.splitext(original_name or "")[1]
        return self._write(extension, stream.read())

    def save_base64(self, data_uri: Optional[str]) -> str:
        if not data_uri:
            raise BadUpload("Field 'image_base64' is missing")
        match = DATA_URI_RE.match(data_uri)
        if not match:
            raise BadUpload("Malformed Base64 data URI")
        extension, payload = match.groups()
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadUpload("Malformed Base64 data URI") from e
        return self._write("." + extension, data)

    def resolve(self, filename: str) -> Path:
        """Locate a stored file by exact name, never leaving the uploads directory."""
        root = self.root.resolve()
        path = (root / filename).resolve()
        if not path.is_relative_to(root) or not path.is_file():
            raise NotFound()
        return path
