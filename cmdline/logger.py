# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for the cmdline option parser."""
import logging

logger: logging.Logger = logging.getLogger("cmdline")
