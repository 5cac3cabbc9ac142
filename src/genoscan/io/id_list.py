"""Sample and variant ID list file I/O for genoscan.

ID list files hold one identifier per line. Only the first
whitespace-delimited token of a line is used, so files with extra columns
(e.g. a sample sheet) can be passed directly.
"""

from pathlib import Path

from loguru import logger


def _read_tokens(path: Path) -> list[str]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"ID list file not found: {path}")

    tokens: list[str] = []
    with open(path) as f:
        for line in f:
            stripped = line.strip()
            if not stripped:
                continue
            tokens.append(stripped.split()[0])

    if not tokens:
        raise ValueError(f"ID list file is empty or contains no valid IDs: {path}")
    return tokens


def read_id_list_file(path: Path) -> set[str]:
    """Read an include/exclude list into a set of IDs.

    Args:
        path: Path to the list file.

    Returns:
        Set of IDs for O(1) membership testing.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is empty or contains no valid IDs.
    """
    ids = set(_read_tokens(path))
    logger.debug(f"Read {len(ids)} IDs from {path}")
    return ids


def read_sample_ids(path: Path) -> list[str]:
    """Read the ordered cohort sample IDs.

    The file order defines the cohort order of every dosage vector.

    Args:
        path: Path to the cohort file.

    Returns:
        Sample IDs in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is empty or lists a sample twice.
    """
    sample_ids = _read_tokens(path)
    seen: set[str] = set()
    for sid in sample_ids:
        if sid in seen:
            raise ValueError(f"Duplicate sample ID '{sid}' in {path}")
        seen.add(sid)
    return sample_ids
