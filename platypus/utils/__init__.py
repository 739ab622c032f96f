"""Platypus utilities."""

from .lookups import Lookups, load_lookups, load_yaml, get_available_locales

__all__ = ["Lookups", "load_lookups", "load_yaml", "get_available_locales"]
