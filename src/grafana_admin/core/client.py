#!/usr/bin/env python3
"""Grafana admin API client."""

from typing import TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .dashboard_builder import DashboardBuilder
from .errors import AlertChannelNotFoundError, APIError, DecodeError, FolderNotFoundError
from .models import AlertChannel, DashboardResult, ErrorEnvelope, Folder

ModelT = TypeVar("ModelT", bound=BaseModel)

# Page size requested from /api/folders; lookups only scan this first page.
FOLDER_LIST_LIMIT = 1000


class AdminAPIClient:
    """
    Client for the Grafana folder, dashboard and alert-channel APIs.

    The client keeps no state besides its configuration, so one instance can
    be shared between callers. Headers are passed per request and the session
    is never modified.
    """

    def __init__(self, session: requests.Session, base_url: str, token: str = "", timeout: float = 30.0):
        """
        Initialize the client.

        Args:
            session: HTTP transport, reused across calls
            base_url: Grafana server URL
            token: Bearer token (service account or API key); empty for unauthenticated requests
            timeout: Default request deadline in seconds
        """
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def _request(
        self,
        action: str,
        method: str,
        path: str,
        timeout: float | None = None,
        **kwargs,
    ) -> requests.Response:
        """
        Send a request and raise APIError on a non-2xx answer.

        Args:
            action: What the request does, used in error messages
            method: HTTP method
            path: API path, starting with /api
            timeout: Deadline override for this call

        Returns:
            The successful response
        """
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers,
            timeout=self.timeout if timeout is None else timeout,
            **kwargs,
        )
        if not 200 <= response.status_code < 300:
            raise self._api_error(action, response)
        return response

    @staticmethod
    def _api_error(action: str, response: requests.Response) -> APIError:
        try:
            envelope = ErrorEnvelope.model_validate(response.json())
        except (ValueError, ValidationError):
            return APIError(action, response.status_code, response.text.strip())
        return APIError(action, response.status_code, envelope.message, envelope.status)

    @staticmethod
    def _decode(response: requests.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"unexpected {model.__name__} response: {e}") from e

    @staticmethod
    def _decode_list(response: requests.Response, model: type[ModelT]) -> list[ModelT]:
        try:
            items = response.json()
            if not isinstance(items, list):
                raise DecodeError(f"expected a list of {model.__name__}, got {type(items).__name__}")
            return [model.model_validate(item) for item in items]
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"unexpected {model.__name__} list: {e}") from e

    def create_folder(self, title: str, *, timeout: float | None = None) -> Folder:
        """
        Create a folder.

        Args:
            title: Folder title

        Returns:
            The created folder, with its server-assigned id and uid

        Raises:
            APIError: If Grafana rejects the request
        """
        response = self._request("create folder", "POST", "/api/folders", json={"title": title}, timeout=timeout)
        return self._decode(response, Folder)

    def list_folders(self, *, timeout: float | None = None) -> list[Folder]:
        """Fetch all folders, in server order."""
        response = self._request(
            "list folders",
            "GET",
            "/api/folders",
            params={"limit": FOLDER_LIST_LIMIT},
            timeout=timeout,
        )
        return self._decode_list(response, Folder)

    def get_folder_by_title(self, title: str, *, timeout: float | None = None) -> Folder:
        """
        Find a folder by title, ignoring case.

        If several folders share the title, the first one returned by
        Grafana wins.

        Args:
            title: Folder title

        Returns:
            The matching folder, with its stored casing

        Raises:
            FolderNotFoundError: If no folder has this title
            APIError: If the folder listing fails
        """
        wanted = title.lower()
        for folder in self.list_folders(timeout=timeout):
            if folder.title.lower() == wanted:
                return folder
        raise FolderNotFoundError(title)

    def get_or_create_folder(self, title: str, *, timeout: float | None = None) -> Folder:
        """
        Get a folder by title, creating it if it doesn't exist.

        Args:
            title: Folder title

        Returns:
            Folder data

        Raises:
            APIError: If listing or creation fails
        """
        try:
            return self.get_folder_by_title(title, timeout=timeout)
        except FolderNotFoundError:
            return self.create_folder(title, timeout=timeout)

    def list_alert_channels(self, *, timeout: float | None = None) -> list[AlertChannel]:
        """Fetch all alert notification channels, in server order."""
        response = self._request("list alert channels", "GET", "/api/alert-notifications", timeout=timeout)
        return self._decode_list(response, AlertChannel)

    def get_alert_channel_by_name(self, name: str, *, timeout: float | None = None) -> AlertChannel:
        """
        Find an alert notification channel by name, ignoring case.

        Raises:
            AlertChannelNotFoundError: If no channel has this name
            APIError: If the channel listing fails
        """
        wanted = name.lower()
        for channel in self.list_alert_channels(timeout=timeout):
            if channel.name.lower() == wanted:
                return channel
        raise AlertChannelNotFoundError(name)

    def upsert_dashboard(
        self,
        folder: Folder | None,
        dashboard: DashboardBuilder,
        overwrite: bool = True,
        message: str | None = None,
        *,
        timeout: float | None = None,
    ) -> DashboardResult:
        """
        Create or update a dashboard.

        Args:
            folder: Folder to place the dashboard in (None for the General folder)
            dashboard: Builder producing the dashboard JSON
            overwrite: Replace an existing dashboard with the same uid or title
            message: Version history message

        Returns:
            Identifiers and status assigned by Grafana

        Raises:
            APIError: If Grafana rejects the dashboard (e.g. version-mismatch)
        """
        payload = {
            "dashboard": dashboard.to_dict(),
            "folderId": folder.id if folder else 0,
            "overwrite": overwrite,
        }
        if folder and folder.uid:
            payload["folderUid"] = folder.uid
        if message:
            payload["message"] = message

        response = self._request("upsert dashboard", "POST", "/api/dashboards/db", json=payload, timeout=timeout)
        return self._decode(response, DashboardResult)

    def delete_dashboard(self, uid: str, *, timeout: float | None = None) -> None:
        """
        Delete a dashboard by UID.

        Raises:
            APIError: If the dashboard doesn't exist or can't be deleted
        """
        self._request("delete dashboard", "DELETE", f"/api/dashboards/uid/{uid}", timeout=timeout)
