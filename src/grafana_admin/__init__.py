"""Client for the Grafana folder, dashboard and alert-channel admin API."""

from grafana_admin.core import (
    AdminAPIClient,
    AlertChannel,
    AlertChannelNotFoundError,
    APIError,
    DashboardBuilder,
    DashboardResult,
    DecodeError,
    ErrorEnvelope,
    Folder,
    FolderNotFoundError,
    GrafanaError,
    NotFoundError,
)

__all__ = [
    "AdminAPIClient",
    "AlertChannel",
    "AlertChannelNotFoundError",
    "APIError",
    "DashboardBuilder",
    "DashboardResult",
    "DecodeError",
    "ErrorEnvelope",
    "Folder",
    "FolderNotFoundError",
    "GrafanaError",
    "NotFoundError",
]
