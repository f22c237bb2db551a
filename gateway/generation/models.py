# -*- coding: utf-8 -*-
"""Generation: data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from pydantic import BaseModel


@dataclass(frozen=True)
class UpstreamCandidate:
    endpoint_template: str
    model: str

    @property
    def url(self) -> str:
        return self.endpoint_template.format(model=self.model)


CandidateList = Tuple[UpstreamCandidate, ...]


class GenerateResponse(BaseModel):
    content: str
