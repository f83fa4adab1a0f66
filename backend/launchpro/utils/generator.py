import os
import secrets
import uuid


def generate_session_id() -> str:
    return secrets.token_hex(32)


def generate_stored_filename(original_name: str, prefix: str | None = None) -> str:
    """Unique on-disk name keeping the original extension."""
    _, extension = os.path.splitext(original_name or "")
    stem = uuid.uuid4().hex
    if prefix:
        stem = f"{prefix}_{stem}"
    return f"{stem}{extension.lower()}"
