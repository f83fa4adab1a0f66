from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "LaunchPro"
    ENVIRONMENT: str = "development"

    DATABASE_URL: str = "sqlite:///./launchpro.db"
    SECRET_KEY: str = "launchpro-secret-key"
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 12

    SESSION_COOKIE_NAME: str = "launchpro_session"
    SESSION_MAX_AGE_HOURS: int = 24

    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_MB: int = 10

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:5000",
    ]

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # first global admin, used by scripts/create_admin.py
    ADMIN_USERNAME: str = "admin"
    ADMIN_NAME: str = "System Admin"
    ADMIN_EMAIL: str = "admin@launchpro.local"
    ADMIN_PASSWORD: str = "Admin@123"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


settings = Settings()
