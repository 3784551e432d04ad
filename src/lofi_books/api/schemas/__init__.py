"""Pydantic response models used for OpenAPI documentation."""
