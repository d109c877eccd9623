"""Unfold: a personal portfolio and CV site."""

__version__ = "1.0.0"
