import logging
import os
import shutil
import uuid
from typing import Iterable, Optional, Tuple

from fastapi import UploadFile

from launchpro.config import settings
from launchpro.core.errors import InfrastructureError, ValidationError, field_error
from launchpro.utils.generator import generate_stored_filename

logger = logging.getLogger(__name__)

IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/svg+xml", "image/gif")


def upload_dir(*parts: str) -> str:
    path = os.path.join(settings.UPLOAD_DIR, *parts)
    os.makedirs(path, exist_ok=True)
    return path


def _upload_size(upload: UploadFile) -> int:
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def store_upload(
    upload: UploadFile,
    *parts: str,
    field_name: str = "file",
    allowed_types: Optional[Iterable[str]] = None,
    prefix: Optional[str] = None,
) -> Tuple[str, int]:
    """Write an upload under ``UPLOAD_DIR/<parts>``; returns (path, size)."""
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded", errors=[field_error(field_name, "No file uploaded", "missing")])

    if allowed_types is not None and upload.content_type not in allowed_types:
        raise ValidationError("Invalid file type", errors=[field_error(field_name, "Invalid file type")])

    size = _upload_size(upload)
    if size > settings.max_upload_bytes:
        raise ValidationError("File too large", errors=[field_error(field_name, "File too large")])

    file_path = os.path.join(upload_dir(*parts), generate_stored_filename(upload.filename, prefix))
    try:
        with open(file_path, "wb") as buffer:
            shutil.copyfileobj(upload.file, buffer)
    except OSError:
        logger.exception("Could not write upload %s", file_path)
        discard_file(file_path)
        raise InfrastructureError("Could not store the uploaded file")

    return file_path, size


def stage_removal(path: str) -> Optional[str]:
    """Move a stored file aside until its record is gone.

    Returns the staged path, or None when the file was already missing.
    """
    staged = f"{path}.{uuid.uuid4().hex}.deleting"
    try:
        os.replace(path, staged)
    except FileNotFoundError:
        logger.warning("Stored file %s was already missing", path)
        return None
    return staged


def restore_file(staged: Optional[str], path: str) -> None:
    if staged:
        os.replace(staged, path)


def finish_removal(staged: Optional[str]) -> None:
    discard_file(staged)


def discard_file(path: Optional[str]) -> None:
    """Best-effort cleanup of an orphaned upload."""
    if not path:
        return
    try:
        os.remove(path)
    except OSError as exc:
        logger.warning("Could not remove orphaned upload %s: %s", path, exc)
