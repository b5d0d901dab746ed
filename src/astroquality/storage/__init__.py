"""Persistent configuration."""
