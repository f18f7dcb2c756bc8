"""Pydantic schemas for fixed-shape API payloads."""
