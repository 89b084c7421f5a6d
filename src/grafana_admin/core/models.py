#!/usr/bin/env python3
"""Response models for the Grafana admin API."""

from pydantic import BaseModel, ConfigDict


class _APIModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Folder(_APIModel):
    """A dashboard folder."""

    id: int
    uid: str
    title: str


class AlertChannel(_APIModel):
    """An alert notification channel (e.g. email, slack)."""

    id: int
    uid: str
    name: str
    type: str


class DashboardResult(_APIModel):
    """Identifiers assigned by Grafana to an upserted dashboard."""

    id: int
    uid: str
    url: str
    status: str
    version: int
    slug: str


class ErrorEnvelope(_APIModel):
    """Error body returned by Grafana on failed requests."""

    message: str = ""
    status: str = ""
