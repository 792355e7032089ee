from fastapi import APIRouter

from webcommon.api.endpoints import health
from webcommon.api.endpoints import notice

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["_meta"])
router.include_router(notice.router, prefix="/notices", tags=["notices"])
