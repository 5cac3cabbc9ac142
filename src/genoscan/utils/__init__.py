"""Utility modules for genoscan."""

from genoscan.utils.logging import setup_logging, write_run_log

__all__ = ["setup_logging", "write_run_log"]
