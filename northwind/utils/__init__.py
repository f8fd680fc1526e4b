"""Utility functions and helpers."""

from .text import like_pattern, contains

__all__ = [
    'like_pattern',
    'contains'
]
