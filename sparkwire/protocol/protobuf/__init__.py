"""Protobuf access layer for Sparkplug B payload messages."""

from __future__ import annotations

from . import sparkplug_b_pb2

__all__ = ["sparkplug_b_pb2"]
