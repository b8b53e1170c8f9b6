"""Observability – structlog configuration and logger helper."""
from allocation.observability.logging.factory import JsonLoggerFactory, configure_logging, get_logger

__all__ = ["JsonLoggerFactory", "configure_logging", "get_logger"]
