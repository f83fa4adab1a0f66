import logging
from typing import Dict, List, Tuple

from launchpro.core.errors import ConflictError, NotFoundError, ValidationError
from launchpro.models.integration import Integration
from launchpro.repositories.storage import Storage

logger = logging.getLogger(__name__)

# credential fields each integration type needs before it can be used
REQUIRED_CREDENTIALS: Dict[str, Tuple[str, ...]] = {
    "whatsapp": ("phoneNumberId", "accessToken", "webhookToken"),
}


def type_taken(integration_type: str) -> ConflictError:
    return ConflictError(f"An integration of type {integration_type} already exists")


def ensure_type_available(storage: Storage, integration_type: str, exclude_id: int | None = None) -> None:
    existing = storage.integrations.get_by_type(integration_type)
    if existing and existing.id != exclude_id:
        raise type_taken(integration_type)


def missing_credentials(integration: Integration) -> List[str]:
    credentials = integration.credentials or {}
    required = REQUIRED_CREDENTIALS.get(integration.type, ())
    return [name for name in required if not credentials.get(name)]


def verify_integration(storage: Storage, integration_type: str) -> dict:
    """Check that a configured integration is enabled and has complete credentials.

    No call is made to the provider.
    """
    integration = storage.integrations.get_by_type(integration_type)
    if not integration:
        raise NotFoundError(f"Integration {integration_type} is not configured")

    if not integration.enabled:
        raise ValidationError(f"Integration {integration_type} is disabled")

    missing = missing_credentials(integration)
    if missing:
        logger.info("Integration %s is missing credentials: %s", integration_type, ", ".join(missing))
        raise ValidationError(
            f"Integration {integration_type} settings are incomplete",
            errors=[
                {"field": f"credentials.{name}", "message": f"{name} is required", "type": "missing"}
                for name in missing
            ],
        )

    return {
        "message": f"Connection to {integration_type} verified successfully",
        "status": "ok",
    }
