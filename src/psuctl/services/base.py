"""BaseService — foundation for the API-backed psuctl services.

Every service receives a :class:`PortainerClient` at construction time
and builds the resolvers it needs on top of it.  Resolvers raise; the
:meth:`BaseService._error_result` helper turns what they raise into a
failed :class:`ServiceResult` so commands only ever see results.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from psuctl.domain.errors import PsuError
from psuctl.services.result import ServiceResult

if TYPE_CHECKING:
    from psuctl.infrastructure.client import PortainerClient

logger = logging.getLogger(__name__)

TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


class BaseService:
    """Base for service-layer classes that talk to the Portainer API.

    Usage::

        class EndpointService(BaseService):
            def inspect(self, name: str | None) -> ServiceResult:
                try:
                    endpoint = EndpointResolver(self._client).resolve(name)
                except (PsuError, httpx.HTTPError) as exc:
                    return self._error_result("inspect_endpoint", exc)
                ...
    """

    def __init__(self, client: PortainerClient) -> None:
        self._client = client

    @staticmethod
    def _error_result(op: str, exc: PsuError | httpx.HTTPError) -> ServiceResult:
        """Convert a resolver or transport exception into a failed result."""
        if isinstance(exc, PsuError):
            return ServiceResult.failure(op, exc.code, exc.message, **exc.detail)

        logger.debug("Portainer request failed", exc_info=True)
        detail: dict[str, object] = {}
        if isinstance(exc, httpx.HTTPStatusError):
            detail["status_code"] = exc.response.status_code
            detail["url"] = str(exc.request.url)
        elif isinstance(exc, httpx.RequestError):
            detail["url"] = str(exc.request.url)
        message = str(exc) or type(exc).__name__
        return ServiceResult.failure(op, TRANSPORT_FAILURE, message, **detail)
