"""Platypus - course navigation, glossary and progress engine for interactive textbooks."""

__version__ = "0.1.0"
