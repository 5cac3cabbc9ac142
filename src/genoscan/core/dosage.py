"""Per-sample dosage extraction.

Converts the raw sample columns of one VCF line into a dosage vector laid out
in cohort order. Values are alternate allele dosages in [0, 2], or
MISSING_DOSAGE for no-calls.
"""

import re
from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

from genoscan.core.records import Encoding, FieldFormat

MISSING_DOSAGE = -1.0
MISSING_TOKENS = frozenset({"", ".", "NN", "NA"})

_ALLELE_SEPARATOR = re.compile(r"[/|]")


class GenotypeCall(NamedTuple):
    """A diploid genotype call; None marks a missing allele."""

    allele_0: int | None
    allele_1: int | None

    @property
    def is_missing(self) -> bool:
        return self.allele_0 is None or self.allele_1 is None

    @property
    def dosage(self) -> int:
        """Alternate allele count. Only valid for non-missing calls."""
        return self.allele_0 + self.allele_1


def parse_genotype_call(token: str) -> GenotypeCall:
    """Tokenize a GT value such as ``0/1`` or ``1|1`` into an allele pair.

    Raises:
        ValueError: If the token is not a two-allele call or an allele is not
            an integer index or ``.``.
    """
    alleles = _ALLELE_SEPARATOR.split(token)
    if len(alleles) != 2:
        raise ValueError(f"Genotypes must be diploid calls, check: {token}")
    parsed: list[int | None] = []
    for allele in alleles:
        if allele == ".":
            parsed.append(None)
        elif allele.isdigit():
            parsed.append(int(allele))
        else:
            raise ValueError(f"Invalid allele '{allele}' in genotype: {token}")
    return GenotypeCall(parsed[0], parsed[1])


def genotype_to_dosage(token: str) -> float:
    """Convert a GT value into an alternate allele dosage.

    A leading ``.`` marks a no-call, including the single ``.`` bcftools
    writes inside multi-field columns such as ``.:0``.

    Raises:
        ValueError: If the call is malformed or its dosage lies outside [0, 2].
    """
    if token.startswith("."):
        return MISSING_DOSAGE
    call = parse_genotype_call(token)
    if call.is_missing:
        return MISSING_DOSAGE
    dosage = call.dosage
    if not 0 <= dosage <= 2:
        raise ValueError(f"Genotypes must be 00, 01, or 11, check: {token}")
    return float(dosage)


def parse_dosage(token: str) -> float:
    """Convert a DS value into a dosage.

    Raises:
        ValueError: If the token is not numeric or lies outside [0, 2].
    """
    if token.startswith("."):
        return MISSING_DOSAGE
    try:
        dosage = float(token)
    except ValueError as e:
        raise ValueError(f"Cannot parse dosage value: {token}") from e
    if not 0.0 <= dosage <= 2.0:
        raise ValueError(f"Dosages must be between 0 and 2, check: {token}")
    return dosage


def sample_value(column: str, field: FieldFormat) -> float:
    """Extract the dosage of one sample column."""
    if column in MISSING_TOKENS:
        return MISSING_DOSAGE
    subfields = column.split(":")
    # trailing sub-fields may be dropped
    if field.index >= len(subfields):
        return MISSING_DOSAGE
    token = subfields[field.index]
    if not token:
        return MISSING_DOSAGE
    if field.encoding is Encoding.DOSAGE:
        return parse_dosage(token)
    return genotype_to_dosage(token)


def extract_dosages(
    columns: Sequence[str],
    resolved: Sequence[tuple[int, int]],
    field: FieldFormat,
    sample_count: int,
) -> np.ndarray:
    """Build the cohort-ordered dosage vector of one line.

    Args:
        columns: Tab-split VCF body line.
        resolved: (column index, cohort slot) pairs from the column mapping.
        field: Value sub-field of this line.
        sample_count: Cohort size.

    Returns:
        float32 array of length sample_count.

    Raises:
        ValueError: If a mapped column is absent from the line or a value is
            malformed.
    """
    if resolved and resolved[-1][0] >= len(columns):
        raise ValueError(
            f"Malformed VCF line: {len(columns)} columns, "
            f"expected at least {resolved[-1][0] + 1}"
        )
    dosages = np.zeros(sample_count, dtype=np.float32)
    for col, slot in resolved:
        dosages[slot] = sample_value(columns[col], field)
    return dosages
