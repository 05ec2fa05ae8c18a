"""Versioned redirect service for Clang diagnostics reference pages."""

__version__ = "0.1.0"
