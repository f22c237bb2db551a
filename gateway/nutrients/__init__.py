# -*- coding: utf-8 -*-
"""Nutrients domain: macro lookup against the USDA food database."""
