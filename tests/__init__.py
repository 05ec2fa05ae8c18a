"""Test package for pxy_redirect."""
