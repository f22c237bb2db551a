from __future__ import annotations

import os
from typing import List, Tuple

DEFAULT_GEMINI_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
DEFAULT_GEMINI_MODELS = "gemini-2.5-flash,gemini-2.0-flash"


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Centralized configuration for the SmartMeal edge gateway."""

    def __init__(self) -> None:
        # ---- Nutrient database (USDA FoodData Central) ----
        self.usda_api_key: str | None = os.environ.get("USDA_API_KEY") or None
        self.usda_base_url: str = os.environ.get(
            "USDA_BASE_URL", "https://api.nal.usda.gov/fdc/v1"
        ).rstrip("/")
        self.usda_page_size: int = int(os.environ.get("USDA_PAGE_SIZE") or "1")

        # ---- Generative text (Gemini) ----
        self.gemini_api_key: str | None = os.environ.get("GEMINI_API_KEY") or None
        self.gemini_endpoint_template: str = (
            os.environ.get("GEMINI_ENDPOINT_TEMPLATE") or DEFAULT_GEMINI_ENDPOINT
        )
        # Order is preference: the first model is always tried first.
        self.gemini_models: Tuple[str, ...] = tuple(
            _split_csv(os.environ.get("GEMINI_MODELS", DEFAULT_GEMINI_MODELS))
        )
        self.gemini_temperature: float = float(
            os.environ.get("GEMINI_TEMPERATURE") or "0.7"
        )
        self.gemini_max_output_tokens: int = int(
            os.environ.get("GEMINI_MAX_OUTPUT_TOKENS") or "24000"
        )
        self.gemini_fallback_delay: float = float(
            os.environ.get("GEMINI_FALLBACK_DELAY") or "1.0"
        )

        # ---- Gateway ----
        self.upstream_timeout: float = float(os.environ.get("UPSTREAM_TIMEOUT") or "60")
        self.log_level: str = (os.environ.get("GATEWAY_LOG_LEVEL") or "INFO").upper()

        cors = os.environ.get("GATEWAY_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = _split_csv(cors)


settings = Settings()
