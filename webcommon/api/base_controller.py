"""
Common data handling for the web layer.

Concrete controllers inherit from BaseController to turn service and
repository outcomes into BaseResult envelopes, and to get request text
bound into dates before it reaches their handlers.
"""

from datetime import date, datetime
from typing import Any, Optional, Type, TypeVar, get_origin

from fastapi import Request, status

from webcommon.core.binding import BINDER_STATE_KEY, DataBinder, get_request_binder
from webcommon.core.exceptions import EmptyPayloadError, TypeMismatchError
from webcommon.core.pagination import PageResult
from webcommon.schemas.common import BaseResult
from webcommon.utils.date_utils import parse_date
from webcommon.utils.logger import get_logger
from webcommon.utils.objects import is_empty, is_not_empty

logger = get_logger(__name__)

T = TypeVar("T")

QUERY_OK_MESSAGE = "query succeeded"
QUERY_EMPTY_MESSAGE = "query failed, result is empty."


def _parse_date_only(text: str) -> Optional[date]:
    value = parse_date(text)
    return value.date() if value is not None else None


class BaseController:
    """Shared helpers for controllers. Holds no state between calls."""

    def convert_type(self, result: BaseResult[Any], required_type: Type[T]) -> T:
        """
        Unwrap the payload of an envelope returned by another service call.

        Args:
            result: Envelope whose ``data`` should hold a ``required_type``
            required_type: Expected payload class. For a parameterized
                generic such as ``list[int]`` only the origin class is checked

        Returns:
            The payload itself, unchanged

        Raises:
            EmptyPayloadError: When the envelope carries no data
            TypeMismatchError: When the data is not a ``required_type``
        """
        data = result.data
        if isinstance(data, get_origin(required_type) or required_type):
            return data
        if is_empty(data):
            raise EmptyPayloadError()
        logger.debug(
            f"Payload of type {type(data).__name__} is not a {required_type!r}"
        )
        raise TypeMismatchError()

    def init_binder(self, binder: DataBinder) -> None:
        """Register date converters; parse errors propagate to the caller."""
        binder.register_converter(datetime, parse_date)
        binder.register_converter(date, _parse_date_only)

    def init_request(self, request: Request) -> DataBinder:
        """
        Router-level dependency preparing the request's binder.

        Runs before the route's own parameters are resolved. The binder is
        created and filled once per request; later calls reuse it.
        """
        binder = get_request_binder(request)
        if binder is None:
            binder = DataBinder()
            self.init_binder(binder)
            setattr(request.state, BINDER_STATE_KEY, binder)
        return binder

    def to_affected_rows(self, rows: int) -> BaseResult[int]:
        """
        Wrap the row count of an insert, update or delete.

        Args:
            rows: Number of affected rows
        """
        return BaseResult.ok(rows) if rows > 0 else BaseResult.fail()

    def to_operation_result(self, flag: bool) -> BaseResult[bool]:
        return BaseResult.ok() if flag else BaseResult.fail()

    def to_response_result(self, entity: Any) -> BaseResult[Any]:
        """Wrap a single entity, or report not-found when it is empty."""
        if is_not_empty(entity):
            return BaseResult.ok(entity, message=QUERY_OK_MESSAGE)
        return BaseResult.fail(status.HTTP_404_NOT_FOUND, QUERY_EMPTY_MESSAGE)

    def to_pageable_result(self, page_result: PageResult[Any]) -> BaseResult[Any]:
        """Wrap a whole page, or report not-found when it has no items."""
        if is_not_empty(page_result.items):
            return BaseResult.ok(page_result, message=QUERY_OK_MESSAGE)
        return BaseResult.fail(status.HTTP_404_NOT_FOUND, QUERY_EMPTY_MESSAGE)
