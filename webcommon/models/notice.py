from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import func

from webcommon.models.base import Base


class Notice(Base):
    __tablename__ = "notices"
    __table_args__ = (
        Index("idx_notices_status", "status"),
        Index("idx_notices_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text)
    status = Column(String(20), nullable=False, server_default="draft")
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
