# -*- coding: utf-8 -*-
"""Generation: Gemini ``generateContent`` calls with model fallback.

Candidates are tried strictly in configured order. Only an overloaded model
(HTTP 503) with another candidate still queued moves the loop forward; every
other outcome, success or failure, is final. Quota, auth and bad-request
errors are not retryable and surface to the caller as-is.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from ..config import Settings
from ..errors import ConfigurationError, ContentAbsent, UpstreamRejection
from ..upstream import UpstreamClient, UpstreamResponse
from .models import CandidateList, UpstreamCandidate

logger = logging.getLogger(__name__)

OVERLOADED_STATUS = 503


def build_candidates(settings: Settings) -> CandidateList:
    return tuple(
        UpstreamCandidate(endpoint_template=settings.gemini_endpoint_template, model=model)
        for model in settings.gemini_models
    )


def build_request_body(prompt: str, settings: Settings) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": settings.gemini_temperature,
            "maxOutputTokens": settings.gemini_max_output_tokens,
        },
    }


def extract_generated_text(data: object) -> Optional[str]:
    """Return ``candidates[0].content.parts[0].text`` or None when any hop is missing."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    first = candidates[0]
    if not isinstance(first, dict):
        return None
    content = first.get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if isinstance(text, str) and text:
        return text
    return None


def extract_error_message(data: object) -> str:
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict):
            msg = err.get("message")
            if isinstance(msg, str) and msg.strip():
                return msg
    return "unknown error"


def require_api_key(settings: Settings) -> str:
    if not settings.gemini_api_key:
        raise ConfigurationError("GEMINI_API_KEY is not configured")
    return settings.gemini_api_key


async def _call_with_fallback(
    candidates: CandidateList,
    payload: Dict[str, Any],
    *,
    api_key: str,
    client: UpstreamClient,
    delay: float,
) -> UpstreamResponse:
    resp: Optional[UpstreamResponse] = None
    for index, candidate in enumerate(candidates):
        resp = await client.post_json(candidate.url, payload, params={"key": api_key})
        is_last = index == len(candidates) - 1
        if resp.status_code == OVERLOADED_STATUS and not is_last:
            logger.warning(
                "gemini model %s overloaded (%s), falling back to %s in %.1fs",
                candidate.model,
                extract_error_message(resp.body),
                candidates[index + 1].model,
                delay,
            )
            await asyncio.sleep(delay)
            continue
        if resp.ok:
            logger.info("gemini model %s answered", candidate.model)
        break

    assert resp is not None
    return resp


async def generate(prompt: str, *, client: UpstreamClient, settings: Settings) -> str:
    api_key = require_api_key(settings)
    candidates = build_candidates(settings)
    if not candidates:
        raise ConfigurationError("GEMINI_MODELS is empty")

    resp = await _call_with_fallback(
        candidates,
        build_request_body(prompt, settings),
        api_key=api_key,
        client=client,
        delay=settings.gemini_fallback_delay,
    )
    data = resp.body
    if not resp.ok:
        message = extract_error_message(data)
        logger.warning("gemini rejected request (status %s): %s", resp.status_code, message)
        raise UpstreamRejection(resp.status_code, message, data)

    text = extract_generated_text(data)
    if not text:
        raise ContentAbsent("no valid text returned", data)
    return text
