"""
Per-request conversion of raw request text into typed values.

A DataBinder is created for every request by BaseController.init_request and
stored on ``request.state``; controllers fill it in ``init_binder``. Route
parameters then go through ``bound_query`` instead of FastAPI's own parsing.
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Query, Request

from webcommon.core.exceptions import BindingError
from webcommon.utils.logger import get_logger

logger = get_logger(__name__)

Converter = Callable[[str], Any]

BINDER_STATE_KEY = "data_binder"


class DataBinder:
    """Registry of text-to-type converters for one request."""

    def __init__(self):
        self._converters: Dict[type, Converter] = {}

    def register_converter(self, target: type, converter: Converter) -> None:
        """Register ``converter`` for ``target``, replacing any previous one."""
        self._converters[target] = converter
        logger.debug(f"Registered converter for {target.__name__}")

    def has_converter(self, target: type) -> bool:
        return target in self._converters

    def bind(self, text: Optional[str], target: type) -> Any:
        """
        Convert ``text`` into ``target``.

        Errors raised by the converter itself propagate unchanged.

        Raises:
            BindingError: When no converter is registered for ``target``
        """
        if text is None:
            return None
        converter = self._converters.get(target)
        if converter is not None:
            return converter(text)
        if target is str:
            return text
        raise BindingError(f"No converter registered for type '{target.__name__}'")


def get_request_binder(request: Request) -> Optional[DataBinder]:
    return getattr(request.state, BINDER_STATE_KEY, None)


def bound_query(name: str, target: type) -> Callable[..., Any]:
    """
    FastAPI dependency binding query parameter ``name`` to ``target``.

    The parameter is declared as text so it still shows up in the OpenAPI
    schema; conversion is left to the request's binder.

    Example:
        created_from: Optional[datetime] = Depends(bound_query("created_from", datetime))
    """

    def dependency(request: Request, text: Optional[str] = Query(None, alias=name)) -> Any:
        binder = get_request_binder(request)
        if binder is None:
            raise BindingError("No data binder initialised for this request")
        return binder.bind(text, target)

    dependency.__name__ = f"bind_{name}"
    return dependency
