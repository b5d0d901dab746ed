"""Astroquality - observability scoring for amateur astrophotography."""

__version__ = "0.1.0"
