from fastapi import Depends
from sqlalchemy.orm import Session

from webcommon.database.session import get_db
from webcommon.models.notice import Notice
from webcommon.repositories.base import BaseRepository


class NoticeRepository(BaseRepository[Notice]):
    def __init__(self, session: Session = Depends(get_db)):
        super().__init__(session, Notice)
