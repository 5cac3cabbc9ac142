"""Interaction covariate file I/O.

Interaction file format:
- Whitespace/tab/space delimited, no header row
- Two columns per row: sample ID and numeric covariate value
- Rows are matched to the cohort by sample ID; extra samples are ignored
- Missing values ("NA") are not allowed since every cohort sample must fall
  into one half of the median split
"""

from collections.abc import Sequence
from pathlib import Path

import numpy as np
from loguru import logger


def read_interaction_file(path: Path, sample_ids: Sequence[str]) -> np.ndarray:
    """Read an interaction covariate aligned to the cohort order.

    Args:
        path: Path to the interaction file.
        sample_ids: Cohort sample IDs in analysis order.

    Returns:
        float64 array of length len(sample_ids).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is empty, a row is malformed, a value is not
            numeric, a sample is listed twice, or a cohort sample has no value.

    Example:
        Interaction file contents (sample ID + age):
        ```
        S1  35.0
        S2  42.0
        S3  28.0
        ```

        >>> read_interaction_file(Path("age.txt"), ["S3", "S1"])
        array([28., 35.])
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Interaction file not found: {path}")

    values: dict[str, float] = {}
    with open(path) as f:
        for i, line in enumerate(f):
            stripped = line.strip()
            if not stripped:
                continue
            parts = stripped.split()
            if len(parts) != 2:
                raise ValueError(
                    f"Interaction file row {i + 1} has {len(parts)} columns "
                    f"but expected 2 (sample ID, value)"
                )
            sid, raw = parts
            if sid in values:
                raise ValueError(f"Interaction file lists sample '{sid}' twice")
            try:
                values[sid] = float(raw)
            except ValueError as e:
                raise ValueError(
                    f"Interaction file row {i + 1}: cannot parse '{raw}' as numeric"
                ) from e

    if not values:
        raise ValueError(f"Interaction file is empty: {path}")

    missing = [sid for sid in sample_ids if sid not in values]
    if missing:
        raise ValueError(
            f"Interaction file has no value for {len(missing)} cohort samples "
            f"(first: {missing[0]})"
        )
    if np.isnan([values[sid] for sid in sample_ids]).any():
        raise ValueError("Interaction file contains NaN values for cohort samples")

    n_extra = len(values) - len(sample_ids)
    if n_extra > 0:
        logger.debug(f"Interaction file: ignoring {n_extra} samples outside cohort")

    return np.array([values[sid] for sid in sample_ids], dtype=np.float64)
