from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from webcommon.api.base_controller import BaseController
from webcommon.database.session import get_db
from webcommon.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()
controller = BaseController()


@router.get("/db")
def health_db(db: Session = Depends(get_db)):
    try:
        alive = db.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        alive = False
    return controller.to_operation_result(alive)
