"""Snapdi domain layer."""
