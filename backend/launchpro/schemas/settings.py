from pydantic import BaseModel
from typing import Optional


class ThemeSettings(BaseModel):
    primary: str
    variant: str
    appearance: str
    radius: str


class OrganizationSettings(BaseModel):
    name: str
    logo: Optional[str] = None


class SettingsOut(BaseModel):
    theme: ThemeSettings
    organization: OrganizationSettings


class ThemeUpdate(BaseModel):
    primary: Optional[str] = None
    variant: Optional[str] = None
    appearance: Optional[str] = None
    radius: Optional[str] = None


class OrganizationUpdate(BaseModel):
    name: Optional[str] = None
    logo: Optional[str] = None


class SettingsUpdate(BaseModel):
    theme: Optional[ThemeUpdate] = None
    organization: Optional[OrganizationUpdate] = None


class LogoUploadResponse(BaseModel):
    logo: str
