# -*- coding: utf-8 -*-
"""Nutrients: USDA FoodData Central search and macro extraction.

API guide: https://fdc.nal.usda.gov/api-guide.html
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, List

from ..config import Settings
from ..errors import ConfigurationError, UpstreamRejection
from ..upstream import UpstreamClient
from .models import MacroSummary, NutrientRecord

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way a lenient float parse reads "31.2 g" as 31.2.
_LEADING_NUM_RE = re.compile(r"\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def _coerce_value(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        m = _LEADING_NUM_RE.match(value)
        if not m:
            return 0.0
        number = float(m.group(0))
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_nutrients(food: Any) -> List[NutrientRecord]:
    """Read ``foodNutrients`` of one search hit into records, skipping junk entries."""
    if not isinstance(food, dict):
        return []
    raw = food.get("foodNutrients")
    if not isinstance(raw, list):
        return []
    records: List[NutrientRecord] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        records.append(
            NutrientRecord(
                name=str(item.get("nutrientName") or ""),
                unit=str(item.get("unitName") or ""),
                value=item.get("value"),
            )
        )
    return records


def extract_macros(records: Iterable[NutrientRecord]) -> MacroSummary:
    """Single pass over ``records``; only gram values count and the last match wins."""
    protein = carbs = fat = 0.0
    for rec in records:
        if rec.unit.lower() != "g":
            continue
        name = rec.name.lower()
        value = _coerce_value(rec.value)
        if "protein" in name:
            protein = value
        if "carbohydrate" in name:
            carbs = value
        if "lipid" in name or "fat" in name:
            fat = value
    return MacroSummary(protein=protein, carbs=carbs, fat=fat)


def require_api_key(settings: Settings) -> str:
    if not settings.usda_api_key:
        raise ConfigurationError("USDA_API_KEY is not configured")
    return settings.usda_api_key


async def lookup_macros(query: str, *, client: UpstreamClient, settings: Settings) -> MacroSummary:
    api_key = require_api_key(settings)

    url = f"{settings.usda_base_url}/foods/search"
    resp = await client.get_json(
        url,
        params={
            "query": query,
            "pageSize": str(settings.usda_page_size),
            "api_key": api_key,
        },
    )
    data = resp.body
    if not resp.ok:
        logger.warning("USDA search rejected (status %s) for query %r", resp.status_code, query)
        raise UpstreamRejection(resp.status_code, "USDA request failed", data)

    foods = data.get("foods") if isinstance(data, dict) else None
    if not isinstance(foods, list) or not foods:
        logger.info("USDA search returned no foods for query %r", query)
        return MacroSummary()

    # Only the best hit is used; the rest of the page is ignored.
    return extract_macros(parse_nutrients(foods[0]))
