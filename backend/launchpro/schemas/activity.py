from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from launchpro.schemas.user import UserOut


class ActivityOut(BaseModel):
    id: int
    user_id: int
    project_id: int
    task_id: Optional[int] = None
    action: str
    subject: str
    details: str
    created_at: datetime
    user: Optional[UserOut] = None

    model_config = {
        "from_attributes": True
    }
