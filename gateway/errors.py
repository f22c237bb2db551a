# -*- coding: utf-8 -*-
"""Gateway error taxonomy.

Every failure a handler can produce is one of these exceptions. The app
registers a single exception handler for :class:`GatewayError` that renders
``to_payload()`` as the JSON body, so no handler ever builds an error response
by hand.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GatewayError(Exception):
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra: Dict[str, Any] = dict(extra or {})

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class ConfigurationError(GatewayError):
    """A required credential or setting is missing. Raised before any network call."""

    status_code = 500


class ValidationError(GatewayError):
    """Caller input is malformed or missing."""

    status_code = 400


class UpstreamTransportError(GatewayError):
    """The provider could not be reached, or its body could not be parsed."""

    status_code = 500


class UpstreamRejection(GatewayError):
    """The provider answered with a non-success status; it is passed through."""

    def __init__(self, status_code: int, message: str, details: Any) -> None:
        super().__init__(message, status_code=status_code, extra={"details": details})
        self.details = details


class ContentAbsent(GatewayError):
    """The provider answered 2xx but without a usable payload."""

    status_code = 500

    def __init__(self, message: str, raw: Any) -> None:
        super().__init__(message, extra={"raw": raw})
        self.raw = raw
