"""
Siteworks - Observability Module

Usage:
    from siteworks.observability import generate_trace_id, setup_logging

    setup_logging("DEBUG")
    generate_trace_id()
"""

from .structured_logging import (
    JSONFormatter,
    generate_trace_id,
    get_trace_id,
    set_trace_id,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "setup_logging",
    "get_trace_id",
    "set_trace_id",
    "generate_trace_id",
]
