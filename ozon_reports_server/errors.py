"""Exceptions raised by the Ozon Seller API client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import CommonResponse


class OzonClientError(Exception):
    """Represents an error when communicating with the Ozon Seller API."""


class TransportError(OzonClientError):
    """The request did not complete with a 2xx response.

    ``status_code`` is None when no response was received at all. For
    error responses, ``envelope`` holds the server's code/message/details.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        envelope: Optional["CommonResponse"] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.envelope = envelope
        self.body = body


class DecodeError(OzonClientError):
    """The response body does not match the expected shape."""
