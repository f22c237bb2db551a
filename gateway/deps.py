# -*- coding: utf-8 -*-
"""FastAPI dependencies resolving per-app objects from ``app.state``."""

from __future__ import annotations

from fastapi import Request

from .config import Settings
from .upstream import UpstreamClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream_client(request: Request) -> UpstreamClient:
    return request.app.state.upstream
