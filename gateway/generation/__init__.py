# -*- coding: utf-8 -*-
"""Generation domain: prompt-in, text-out over an ordered list of Gemini models."""
