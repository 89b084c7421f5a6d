"""Core library classes for grafana-admin."""

from .client import AdminAPIClient
from .config_manager import GrafanaConfigManager
from .dashboard_builder import DashboardBuilder
from .errors import (
    AlertChannelNotFoundError,
    APIError,
    DecodeError,
    FolderNotFoundError,
    GrafanaError,
    NotFoundError,
)
from .jsonnet_builder import JsonnetBuilder
from .models import AlertChannel, DashboardResult, ErrorEnvelope, Folder

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
    "GrafanaConfigManager",
    "GrafanaError",
    "JsonnetBuilder",
    "NotFoundError",
]
