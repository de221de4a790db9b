"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- constants: Option lists for the onboarding form

Usage:
======
    from hestia.shared.utils.constants import CRAFT_CATEGORIES, LOCATIONS
"""

from hestia.shared.utils.constants import CRAFT_CATEGORIES, LOCATIONS

__all__ = [
    "CRAFT_CATEGORIES",
    "LOCATIONS",
]
