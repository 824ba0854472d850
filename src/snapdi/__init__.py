"""Snapdi - photography booking platform backend.

Core application package: shared domain primitives, content (blogs,
keywords, photographer profiles), persistence plumbing and the HTTP API.
Identity and authentication live in snapdi_identity.
"""
