from copy import deepcopy
from typing import Optional

from launchpro.models.integration import AppSettings
from launchpro.repositories.storage import Storage

DEFAULT_THEME = {
    "primary": "#0ea5e9",
    "variant": "professional",
    "appearance": "light",
    "radius": "0.5",
}

DEFAULT_ORGANIZATION = {
    "name": "LaunchRocket",
    "logo": None,
}


def _merged(defaults: dict, stored: Optional[dict]) -> dict:
    merged = deepcopy(defaults)
    merged.update(stored or {})
    return merged


def current_settings(storage: Storage) -> dict:
    row = storage.settings.current()
    return {
        "theme": _merged(DEFAULT_THEME, row.theme if row else None),
        "organization": _merged(DEFAULT_ORGANIZATION, row.organization if row else None),
    }


def update_settings(storage: Storage, user_id: int, theme: Optional[dict] = None, organization: Optional[dict] = None) -> dict:
    """Merge the given sections over what is stored and persist the result."""
    row = storage.settings.current()
    if row is None:
        row = storage.settings.add(AppSettings(theme={}, organization={}))

    changes = {"updated_by": user_id}
    if theme:
        changes["theme"] = {**(row.theme or {}), **theme}
    if organization:
        changes["organization"] = {**(row.organization or {}), **organization}
    storage.settings.update(row, changes)
    storage.commit()
    return current_settings(storage)
