"""
Observability Layer.

This package contains logging setup shared by the registry and the CLI.
"""

from trace_registry.observability.logger import JsonFormatter, get_logger

__all__ = ["JsonFormatter", "get_logger"]
