from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from webcommon.api.base_controller import BaseController
from webcommon.core.binding import bound_query
from webcommon.core.pagination import PaginationParams, get_pagination_params
from webcommon.schemas.common import BaseResult
from webcommon.schemas.notice import NoticeCreate, NoticeSchema, NoticeStatus, NoticeUpdate
from webcommon.services.notice import NoticeService


class NoticeController(BaseController):
    """System notices; every handler answers with a BaseResult envelope."""

    # --------- GET /notices ----------
    def list_notices(
        self,
        pagination: PaginationParams = Depends(get_pagination_params),
        status: Optional[NoticeStatus] = Query(None),
        created_from: Optional[datetime] = Depends(bound_query("created_from", datetime)),
        created_to: Optional[datetime] = Depends(bound_query("created_to", datetime)),
        service: NoticeService = Depends(),
    ):
        page = service.find_paginated(
            pagination=pagination,
            status=status,
            created_from=created_from,
            created_to=created_to,
        )
        return self.to_pageable_result(page)

    # --------- GET /notices/{notice_id} ----------
    def get_notice(
        self,
        notice_id: int = Path(..., ge=1),
        service: NoticeService = Depends(),
    ):
        return self.to_response_result(service.find_by_id(notice_id))

    # --------- GET /notices/{notice_id}/title ----------
    def get_notice_title(
        self,
        notice_id: int = Path(..., ge=1),
        service: NoticeService = Depends(),
    ):
        notice = self.convert_type(service.fetch(notice_id), NoticeSchema)
        return BaseResult.ok(notice.title)

    # --------- POST /notices ----------
    def create_notice(
        self,
        payload: NoticeCreate,
        service: NoticeService = Depends(),
    ):
        return self.to_response_result(service.create(payload))

    # --------- PUT /notices/{notice_id} ----------
    def update_notice(
        self,
        payload: NoticeUpdate,
        notice_id: int = Path(..., ge=1),
        service: NoticeService = Depends(),
    ):
        return self.to_affected_rows(service.update_one(notice_id, payload))

    # --------- DELETE /notices/{notice_id} ----------
    def delete_notice(
        self,
        notice_id: int = Path(..., ge=1),
        service: NoticeService = Depends(),
    ):
        return self.to_operation_result(service.delete_one(notice_id))


controller = NoticeController()

# init_request runs before route parameters, so bound_query finds the binder
router = APIRouter(dependencies=[Depends(controller.init_request)])
router.add_api_route("", controller.list_notices, methods=["GET"])
router.add_api_route("", controller.create_notice, methods=["POST"])
router.add_api_route("/{notice_id}", controller.get_notice, methods=["GET"])
router.add_api_route("/{notice_id}/title", controller.get_notice_title, methods=["GET"])
router.add_api_route("/{notice_id}", controller.update_notice, methods=["PUT"])
router.add_api_route("/{notice_id}", controller.delete_notice, methods=["DELETE"])
