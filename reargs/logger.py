# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Reargs."""
import logging

logger: logging.Logger = logging.getLogger("reargs")
