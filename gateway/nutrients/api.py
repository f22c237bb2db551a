# -*- coding: utf-8 -*-
"""Nutrients: API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import Settings
from ..deps import get_settings, get_upstream_client
from ..errors import UpstreamTransportError, ValidationError
from ..upstream import UpstreamClient
from .models import MacroSummary
from .usda import lookup_macros, require_api_key

router = APIRouter(tags=["Nutrients"])


@router.get("/macros", response_model=MacroSummary, summary="Macro-nutrients (g) of the best USDA match")
async def macros(
    query: Optional[str] = Query(default=None, description="Free-text food search, e.g. 'chicken breast'"),
    settings: Settings = Depends(get_settings),
    client: UpstreamClient = Depends(get_upstream_client),
):
    require_api_key(settings)

    query = (query or "").strip()
    if not query:
        raise ValidationError("query parameter required")

    try:
        return await lookup_macros(query, client=client, settings=settings)
    except UpstreamTransportError as exc:
        raise UpstreamTransportError(f"Macros Worker Error: {exc.message}") from exc
