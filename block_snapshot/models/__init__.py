"""Pydantic models describing block storage topology."""
