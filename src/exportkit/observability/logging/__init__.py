"""Observability – structured logging helpers."""
from exportkit.observability.logging.factory import JsonLoggerFactory
from exportkit.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
