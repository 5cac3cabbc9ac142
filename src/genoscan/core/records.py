"""VCF body line tokenization, FORMAT resolution and the INFO AF prefilter."""

from enum import Enum
from typing import NamedTuple

from genoscan.core.samples import N_FIXED_COLUMNS

CHROM, POS, ID, REF, ALT, QUAL, FILTER, INFO, FORMAT = range(N_FIXED_COLUMNS)


class Encoding(Enum):
    """How per-sample values are encoded on a line."""

    DOSAGE = "DS"
    GENOTYPE = "GT"


class FieldFormat(NamedTuple):
    """Position of the value sub-field within each sample column."""

    index: int
    encoding: Encoding


def tokenize_record(line: str) -> list[str]:
    """Split a VCF body line into its tab-separated columns.

    Raises:
        ValueError: If the line has no sample columns.
    """
    columns = line.rstrip("\r\n").split("\t")
    if len(columns) < N_FIXED_COLUMNS + 1:
        raise ValueError(
            f"Malformed VCF line: expected at least {N_FIXED_COLUMNS + 1} "
            f"columns, got {len(columns)}"
        )
    return columns


def resolve_format(format_column: str) -> FieldFormat | None:
    """Locate the DS sub-field, falling back to GT.

    Returns:
        FieldFormat for the value sub-field, or None when the line carries
        neither DS nor GT.
    """
    names = format_column.split(":")
    if "DS" in names:
        return FieldFormat(names.index("DS"), Encoding.DOSAGE)
    if "GT" in names:
        return FieldFormat(names.index("GT"), Encoding.GENOTYPE)
    return None


def parse_info_af(info_column: str) -> float | None:
    """Return the first ``AF`` value of an INFO column, or None if absent.

    Multi-allelic AF lists use the first comma-separated value.

    Raises:
        ValueError: If the AF value is not numeric.
    """
    for entry in info_column.split(";"):
        key, _, value = entry.partition("=")
        if key == "AF":
            token = value.split(",", 1)[0]
            try:
                return float(token)
            except ValueError as e:
                raise ValueError(f"Cannot parse INFO AF value '{value}'") from e
    return None


def passes_global_af(info_column: str, threshold: float) -> bool:
    """Check the INFO AF annotation against a symmetric frequency band.

    Sites with AF below ``threshold`` or above ``1 - threshold`` fail. Sites
    without an AF annotation pass.
    """
    af = parse_info_af(info_column)
    if af is None:
        return True
    return not (af < threshold or af > 1.0 - threshold)
