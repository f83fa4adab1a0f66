from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class FileOut(BaseModel):
    id: int
    project_id: int
    task_id: Optional[int] = None
    name: str
    mime_type: Optional[str] = None
    size: int
    uploaded_by: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
