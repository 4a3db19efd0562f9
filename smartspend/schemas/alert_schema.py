from datetime import datetime

from pydantic import BaseModel


class Alert(BaseModel):
    alert_id: int
    user_id: int
    type: str
    message: str
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True
