#!/usr/bin/env python3
"""Exceptions raised by the Grafana admin client.

Transport failures (connection errors, timeouts) are not wrapped: the
``requests`` exception reaches the caller unchanged.
"""


class GrafanaError(Exception):
    """Base class for errors raised by grafana-admin."""


class APIError(GrafanaError):
    """Grafana answered with a non-2xx status code."""

    def __init__(self, action: str, status_code: int, message: str, status: str = ""):
        self.action = action
        self.status_code = status_code
        self.message = message
        self.status = status

        detail = message or f"HTTP {status_code}"
        if status:
            detail = f"{detail} ({status})"
        super().__init__(f"could not {action}: {detail}")


class DecodeError(GrafanaError):
    """A successful response body could not be decoded."""


class NotFoundError(GrafanaError):
    """A listing succeeded but nothing matched the requested name."""

    kind = "resource"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{self.kind} not found: {name!r}")


class FolderNotFoundError(NotFoundError):
    kind = "folder"


class AlertChannelNotFoundError(NotFoundError):
    kind = "alert channel"
