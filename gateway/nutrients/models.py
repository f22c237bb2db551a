# -*- coding: utf-8 -*-
"""Nutrients: data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel


@dataclass(frozen=True)
class NutrientRecord:
    name: str
    unit: str
    value: Any


class MacroSummary(BaseModel):
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
