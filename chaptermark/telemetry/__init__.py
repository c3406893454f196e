"""Telemetry and observability helpers.

This package emits run events for deterministic auditing of chapter writes.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
