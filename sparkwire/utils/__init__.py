"""Payload stamping helpers."""
