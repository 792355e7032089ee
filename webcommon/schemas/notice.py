from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NoticeStatus = Literal["draft", "published", "closed"]


class NoticeBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, examples=["Scheduled maintenance"])
    content: Optional[str] = Field(None, examples=["The service is unavailable on Sunday 02:00-04:00 UTC."])
    status: NoticeStatus = "draft"


class NoticeCreate(NoticeBase):
    pass


class NoticeUpdate(NoticeBase):
    pass


class NoticeSchema(NoticeBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
