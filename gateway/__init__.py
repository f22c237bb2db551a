# -*- coding: utf-8 -*-
"""SmartMeal edge gateway: nutrient lookup and AI generation proxy."""
