from datetime import datetime, time, timedelta, timezone
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from webcommon.core.exceptions import ValidationError
from webcommon.core.pagination import PageResult, PaginationParams, paginate
from webcommon.database.session import get_db
from webcommon.repositories import NoticeRepository
from webcommon.repositories.base import WhereExpr
from webcommon.schemas.common import BaseResult
from webcommon.schemas.notice import NoticeCreate, NoticeSchema, NoticeStatus, NoticeUpdate
from webcommon.utils.logger import log_execution_time


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # created_at is stored as naive UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _normalize_range(
        date_from: Optional[datetime], date_to: Optional[datetime]
) -> tuple[Optional[datetime], Optional[datetime]]:
    date_only_end = date_to is not None and date_to.tzinfo is None and date_to.time() == time.min
    date_from, date_to = _to_naive_utc(date_from), _to_naive_utc(date_to)
    if date_from and date_to and date_from > date_to:
        raise ValidationError("created_from must not be after created_to")
    if date_only_end:
        date_to = date_to + timedelta(days=1)  # make date-only end exclusive
    return date_from, date_to


class NoticeService:
    def __init__(self, db: Session = Depends(get_db)):
        self.notice_repository = NoticeRepository(db)

    def find_by_id(self, notice_id: int) -> Optional[NoticeSchema]:
        notice = self.notice_repository.find_one(where={"id": notice_id})
        return NoticeSchema.model_validate(notice) if notice is not None else None

    def fetch(self, notice_id: int) -> BaseResult[NoticeSchema]:
        """
        Envelope-returning lookup, the shape other services receive.

        A missing notice yields a success envelope without data.
        """
        return BaseResult.ok(self.find_by_id(notice_id))

    @log_execution_time
    def find_paginated(
            self,
            pagination: PaginationParams,
            status: Optional[NoticeStatus] = None,
            created_from: Optional[datetime] = None,
            created_to: Optional[datetime] = None,
    ) -> PageResult[NoticeSchema]:
        """
        List notices newest first.

        Raises:
            ValidationError: When created_from is after created_to
        """
        created_from, created_to = _normalize_range(created_from, created_to)

        where: WhereExpr = {}
        if status:
            where["status"] = status
        created_at = {}
        if created_from:
            created_at[">="] = created_from
        if created_to:
            created_at["<"] = created_to
        if created_at:
            where["created_at"] = created_at

        items, total = self.notice_repository.find_paginated(
            where=where,
            order_by=[("created_at", "desc"), ("id", "desc")],
            pagination=pagination,
        )
        return paginate(
            [NoticeSchema.model_validate(n) for n in items],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )

    def create(self, payload: NoticeCreate) -> NoticeSchema:
        notice = self.notice_repository.create(data=payload.model_dump())
        return NoticeSchema.model_validate(notice)

    def update_one(self, notice_id: int, payload: NoticeUpdate) -> int:
        """Full update (PUT). Returns the number of updated rows."""
        return self.notice_repository.update(where={"id": notice_id}, data=payload.model_dump())

    def delete_one(self, notice_id: int) -> bool:
        return self.notice_repository.delete(where={"id": notice_id}) == 1
