"""Framewright — generate AI-ready project frameworks from a planning wizard."""

__version__ = "0.1.0"
