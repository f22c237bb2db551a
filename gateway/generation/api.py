# -*- coding: utf-8 -*-
"""Generation: API endpoints."""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request

from ..config import Settings
from ..deps import get_settings, get_upstream_client
from ..errors import UpstreamTransportError, ValidationError
from ..upstream import UpstreamClient
from .gemini import generate, require_api_key
from .models import GenerateResponse

router = APIRouter(tags=["Generation"])


async def _read_prompt(request: Request) -> str:
    raw = await request.body()
    try:
        body = json.loads(raw)
    except ValueError as exc:
        raise ValidationError("invalid JSON body") from exc

    prompt = body.get("prompt") if isinstance(body, dict) else None
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValidationError("prompt required")
    return prompt


@router.post("/gemini", response_model=GenerateResponse, summary="Generate text with model fallback")
async def gemini(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: UpstreamClient = Depends(get_upstream_client),
):
    require_api_key(settings)
    prompt = await _read_prompt(request)

    try:
        content = await generate(prompt, client=client, settings=settings)
    except UpstreamTransportError as exc:
        raise UpstreamTransportError(f"Worker Error: {exc.message}") from exc
    return GenerateResponse(content=content)
