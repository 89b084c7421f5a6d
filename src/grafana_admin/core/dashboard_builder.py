#!/usr/bin/env python3
"""Builder for Grafana dashboard payloads."""

import copy

SCHEMA_VERSION = 39


class DashboardBuilder:
    """
    Assembles the dashboard JSON sent to Grafana on upsert.

    Either describe a dashboard with keyword options, or wrap JSON rendered
    elsewhere (e.g. by Jsonnet) with ``DashboardBuilder.from_json``.
    """

    def __init__(
        self,
        title: str,
        uid: str | None = None,
        tags: list[str] | None = None,
        editable: bool = True,
        timezone: str = "browser",
        refresh: str | None = None,
        time_from: str = "now-3h",
        time_to: str = "now",
        shared_crosshair: bool = False,
        panels: list[dict] | None = None,
    ):
        """
        Initialize the builder.

        Args:
            title: Dashboard title
            uid: Stable dashboard UID (Grafana generates one if omitted)
            tags: Dashboard tags
            editable: Whether the dashboard can be edited in the UI
            timezone: "browser", "utc" or an IANA zone name
            refresh: Auto-refresh interval (e.g. "30s"), None to disable
            time_from: Start of the default time range
            time_to: End of the default time range
            shared_crosshair: Share the crosshair between panels
            panels: Raw panel definitions
        """
        self._json = {
            "title": title,
            "tags": list(tags or []),
            "editable": editable,
            "timezone": timezone,
            "refresh": refresh or "",
            "time": {"from": time_from, "to": time_to},
            "graphTooltip": 1 if shared_crosshair else 0,
            "panels": [copy.deepcopy(panel) for panel in panels or []],
            "schemaVersion": SCHEMA_VERSION,
        }
        if uid:
            self._json["uid"] = uid

    @classmethod
    def from_json(cls, dashboard_json: dict) -> "DashboardBuilder":
        """Wrap an already rendered dashboard."""
        if "title" not in dashboard_json:
            raise ValueError("dashboard JSON must have a title")

        builder = cls.__new__(cls)
        builder._json = copy.deepcopy(dashboard_json)
        return builder

    @property
    def title(self) -> str:
        return self._json["title"]

    def to_dict(self) -> dict:
        """
        Return the dashboard JSON.

        The numeric ``id`` is dropped: Grafana matches existing dashboards
        by uid or title, and a stale id from another instance would be
        rejected.
        """
        dashboard = copy.deepcopy(self._json)
        dashboard.pop("id", None)
        return dashboard
