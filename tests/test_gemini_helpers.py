# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import unittest
from unittest import mock

from gateway.config import Settings
from gateway.generation.gemini import (
    build_candidates,
    extract_error_message,
    extract_generated_text,
)
from gateway.generation.models import UpstreamCandidate


class TestExtractGeneratedText(unittest.TestCase):
    def test_first_part_of_first_candidate(self) -> None:
        data = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
                {"content": {"parts": [{"text": "other candidate"}]}},
            ]
        }
        self.assertEqual(extract_generated_text(data), "first")

    def test_missing_hops(self) -> None:
        for data in (
            None,
            [],
            {},
            {"candidates": []},
            {"candidates": ["x"]},
            {"candidates": [{}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
            {"candidates": [{"content": {"parts": [{"text": 7}]}}]},
        ):
            self.assertIsNone(extract_generated_text(data), data)


class TestExtractErrorMessage(unittest.TestCase):
    def test_google_error_shape(self) -> None:
        self.assertEqual(
            extract_error_message({"error": {"code": 403, "message": "Permission denied"}}),
            "Permission denied",
        )

    def test_fallback(self) -> None:
        for data in (None, "oops", {}, {"error": "flat string"}, {"error": {"message": "  "}}):
            self.assertEqual(extract_error_message(data), "unknown error", data)


class TestBuildCandidates(unittest.TestCase):
    def test_order_follows_configuration(self) -> None:
        env = {
            "GEMINI_MODELS": "m-1, m-2 ,,m-3",
            "GEMINI_ENDPOINT_TEMPLATE": "https://x.test/models/{model}:generateContent",
        }
        with mock.patch.dict(os.environ, env):
            candidates = build_candidates(Settings())
        self.assertEqual([c.model for c in candidates], ["m-1", "m-2", "m-3"])
        self.assertIsInstance(candidates, tuple)
        self.assertEqual(candidates[1].url, "https://x.test/models/m-2:generateContent")

    def test_candidates_are_frozen(self) -> None:
        candidate = UpstreamCandidate("https://x.test/{model}", "m")
        with self.assertRaises(AttributeError):
            candidate.model = "other"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
