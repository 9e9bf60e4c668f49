"""Companion Genetics - base-7 genome encoding and breeding simulation."""

from companion_genetics.logging_config import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = ["__version__", "configure_logging", "get_logger"]
