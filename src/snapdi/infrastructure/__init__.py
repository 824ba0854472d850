"""Snapdi infrastructure layer."""
