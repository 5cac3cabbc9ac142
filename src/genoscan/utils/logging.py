"""Logging utilities for genoscan.

This module provides loguru-based logging configuration and the run log
written next to the CLI outputs.
"""

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

import genoscan
from genoscan.core.config import OutputConfig


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure loguru for genoscan.

    Sets up console logging with INFO level (or DEBUG if verbose), and
    optional file logging with JSON serialization.

    Args:
        verbose: If True, set console logging to DEBUG level.
        log_file: Optional path to log file. If provided, DEBUG-level
            logs are written with JSON serialization.
    """
    logger.remove()

    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stdout,
        level=level,
        format="{time:HH:mm:ss} | <level>{level: <8}</level> | {message}",
        colorize=True,
    )

    if log_file:
        logger.add(
            log_file,
            serialize=True,
            level="DEBUG",
        )


def write_run_log(
    output_config: OutputConfig,
    params: dict,
    counts: dict,
    timing: dict,
    command_line: str,
) -> Path:
    """Write the run log file.

    Produces a .log.txt file with ## prefixes for section headers.

    Args:
        output_config: Output configuration specifying directory and prefix.
        params: Dictionary of run parameters (e.g., region, thresholds).
        counts: Dictionary of scan counts (e.g., n_samples, n_included).
        timing: Dictionary of timing information in seconds.
        command_line: The command line used to invoke the program.

    Returns:
        Path to the written log file.

    Example output format:
        ##
        ## genoscan Version = 0.1.0
        ## Date = 2026-01-31T10:30:00
        ##
        ## Command Line Input = genoscan scan --vcf chr22.vcf.gz ...
        ##
        ## Parameters:
        ## region = 22:16000000-17000000
        ##
        ## Summary Statistics:
        ## n_included = 1520
        ##
        ## Computation Time:
        ## total time = 1.23 seconds
        ##
    """
    output_config.ensure_outdir()

    log_path = output_config.log_path

    with open(log_path, "w") as f:
        f.write("##\n")
        f.write(f"## genoscan Version = {genoscan.__version__}\n")
        f.write(f"## Date = {datetime.now().isoformat()}\n")
        f.write("##\n")

        f.write(f"## Command Line Input = {command_line}\n")
        f.write("##\n")

        f.write("## Parameters:\n")
        for key, value in params.items():
            f.write(f"## {key} = {value}\n")
        f.write("##\n")

        f.write("## Summary Statistics:\n")
        for key, value in counts.items():
            f.write(f"## {key} = {value}\n")
        f.write("##\n")

        f.write("## Computation Time:\n")
        for key, value in timing.items():
            if isinstance(value, float):
                f.write(f"## {key} time = {value:.2f} seconds\n")
            else:
                f.write(f"## {key} time = {value} seconds\n")
        f.write("##\n")

    return log_path
