"""
File Storage - Upload Storage for UGC Submissions

Handles storage and retrieval of the single file attached to a submission.
Files are written once under a collision-resistant name and never
overwritten; the returned reference is what the submission record keeps.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path, PureWindowsPath
from typing import Final, Optional
from uuid import uuid4

from core.submission.results import SaveFileResult, StorageError, StoredFile


logger = logging.getLogger(__name__)


# =============================================================================
# Storage Configuration
# =============================================================================

DEFAULT_UPLOAD_PATH: Final[str] = "data/UploadedFiles"
DEFAULT_URL_PREFIX: Final[str] = "/UploadedFiles"

# Attempts at drawing a fresh token before giving up on a name
MAX_NAME_ATTEMPTS: Final[int] = 5


# =============================================================================
# File Store Interface
# =============================================================================


class FileStore(ABC):
    """Persists uploaded bytes and hands back an opaque reference."""

    @abstractmethod
    def save(self, original_name: str, content: bytes) -> SaveFileResult:
        """
        Write bytes under a name no earlier upload has used.

        Args:
            original_name: File name as sent by the client
            content: File content

        Returns:
            StoredFile on success, StorageError if the write failed
        """

    @abstractmethod
    def retrieve(self, reference: str) -> Optional[bytes]:
        """Read back stored bytes, or None if nothing is stored there."""

    @abstractmethod
    def count(self) -> int:
        """Number of files currently stored."""


# =============================================================================
# Local File Store
# =============================================================================


class LocalFileStore(FileStore):
    """
    File store backed by a local upload directory.

    Files are stored flat under the upload root as
    {upload_root}/{token}_{original_name}
    and referenced as {url_prefix}/{token}_{original_name}.
    """

    def __init__(
        self,
        upload_root: Optional[str] = None,
        url_prefix: str = DEFAULT_URL_PREFIX,
    ):
        """
        Initialise file storage.

        Args:
            upload_root: Directory for uploaded files.
                         Defaults to data/UploadedFiles.
            url_prefix: Prefix of the references handed to records
        """
        self._upload_root = Path(upload_root or DEFAULT_UPLOAD_PATH)
        self._url_prefix = "/" + url_prefix.strip("/")
        self._upload_root.mkdir(parents=True, exist_ok=True)

    @property
    def upload_root(self) -> Path:
        """Get upload root path."""
        return self._upload_root

    @property
    def url_prefix(self) -> str:
        """Get reference prefix."""
        return self._url_prefix

    @staticmethod
    def _sanitise_filename(filename: str) -> str:
        """Reduce a client file name to a safe base name."""
        # Clients may send full paths in either convention
        base = PureWindowsPath(filename or "").name
        safe = base.strip().strip(".").replace("..", "_")
        if not safe:
            safe = "upload"
        return safe

    @staticmethod
    def _generate_token() -> str:
        return uuid4().hex

    def _reference_for(self, stored_name: str) -> str:
        return f"{self._url_prefix}/{stored_name}"

    def save(self, original_name: str, content: bytes) -> SaveFileResult:
        safe_name = self._sanitise_filename(original_name)

        try:
            self._upload_root.mkdir(parents=True, exist_ok=True)
            for _ in range(MAX_NAME_ATTEMPTS):
                stored_name = f"{self._generate_token()}_{safe_name}"
                path = self._upload_root / stored_name
                try:
                    # Exclusive create: an existing file is never overwritten
                    with path.open("xb") as handle:
                        handle.write(content)
                except FileExistsError:
                    continue

                logger.info("Stored upload %s (%d bytes)", stored_name, len(content))
                return StoredFile(
                    reference=self._reference_for(stored_name),
                    stored_name=stored_name,
                    size_bytes=len(content),
                )
        except OSError as e:
            logger.error("Could not store upload %r: %s", original_name, e)
            return StorageError(detail=str(e))

        logger.error("No free name for upload %r after %d attempts", original_name, MAX_NAME_ATTEMPTS)
        return StorageError(detail="Could not allocate a unique file name")

    def resolve(self, reference: str) -> Optional[Path]:
        """
        Map a reference back to a path under the upload root.

        Args:
            reference: Reference from StoredFile.reference or a stored name

        Returns:
            Path if the reference names a file under the upload root,
            None otherwise
        """
        name = reference
        if reference.startswith(self._url_prefix + "/"):
            name = reference[len(self._url_prefix) + 1:]

        if not name or "/" in name or "\\" in name or name in (".", ".."):
            return None

        path = self._upload_root / name
        if path.is_file():
            return path
        return None

    def retrieve(self, reference: str) -> Optional[bytes]:
        path = self.resolve(reference)
        if path is None:
            return None
        return path.read_bytes()

    def count(self) -> int:
        """Number of files currently in the upload root."""
        return sum(1 for p in self._upload_root.iterdir() if p.is_file())
