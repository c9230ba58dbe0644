# -*- coding: utf-8 -*-
"""Nutrition domain (meal plan templates).

Templates belong to a category (Fat Loss - Moderate, Recomposition, ...) and hold
days of meals with structured ingredients. Grocery lists and template
recommendations are computed from that data in `grocery` and `recommend`.
"""
