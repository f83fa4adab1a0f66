from typing import List, Optional

from launchpro.models.integration import AppSettings, Integration
from launchpro.repositories.base import Repository


class IntegrationRepository(Repository[Integration]):
    model = Integration

    def list(self) -> List[Integration]:
        return self.db.query(Integration).order_by(Integration.type).all()

    def get_by_type(self, integration_type: str) -> Optional[Integration]:
        return self.db.query(Integration).filter(Integration.type == integration_type).first()


class SettingsRepository(Repository[AppSettings]):
    model = AppSettings

    def current(self) -> Optional[AppSettings]:
        return self.db.query(AppSettings).order_by(AppSettings.id).first()
