"""Utility helpers."""

from .text import calculate_discount_percentage, create_slug

__all__ = ["calculate_discount_percentage", "create_slug"]
