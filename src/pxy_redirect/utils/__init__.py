"""Shared helpers for logging and request context."""
