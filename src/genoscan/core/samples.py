"""Sample reconciliation between VCF header columns and the analysis cohort.

The cohort is fixed before the scan starts (its order defines the layout of
every dosage vector). Each sample column of the VCF header is mapped onto a
cohort slot, or onto -1 when the column is excluded or has no cohort entry.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
from loguru import logger

# CHROM POS ID REF ALT QUAL FILTER INFO FORMAT
N_FIXED_COLUMNS = 9
UNMAPPED = -1


class SampleRegistry:
    """Ordered cohort of sample IDs with an optional include/exclude predicate.

    Args:
        sample_ids: Cohort sample IDs in analysis order.
        include: If given, only these samples are members of the cohort.
        exclude: Samples removed from the cohort.

    Raises:
        ValueError: If sample_ids is empty or contains duplicates.
    """

    def __init__(
        self,
        sample_ids: Sequence[str],
        include: Iterable[str] | None = None,
        exclude: Iterable[str] | None = None,
    ) -> None:
        if len(sample_ids) == 0:
            raise ValueError("Sample registry is empty")
        self._index = {sid: i for i, sid in enumerate(sample_ids)}
        if len(self._index) != len(sample_ids):
            raise ValueError("Sample registry contains duplicate IDs")
        self.sample_ids = tuple(sample_ids)
        self.include = frozenset(include) if include is not None else None
        self.exclude = frozenset(exclude) if exclude is not None else frozenset()

    @property
    def sample_count(self) -> int:
        return len(self.sample_ids)

    def is_member(self, label: str) -> bool:
        """Return True if the label passes the include/exclude lists."""
        if self.include is not None and label not in self.include:
            return False
        return label not in self.exclude

    def index_of(self, label: str) -> int | None:
        """Return the cohort slot of a sample, or None if it is not registered."""
        return self._index.get(label)


@dataclass
class ColumnMapping:
    """Mapping from VCF sample columns to cohort slots.

    Attributes:
        slots: One entry per header sample column; a cohort index or -1.
        n_included: Columns resolved to a cohort slot.
        n_excluded: Columns rejected by the include/exclude predicate.
        n_missing: Columns passing the predicate but absent from the cohort.
    """

    slots: np.ndarray
    n_included: int
    n_excluded: int
    n_missing: int

    def __len__(self) -> int:
        return len(self.slots)

    def resolved(self) -> list[tuple[int, int]]:
        """Return (line column index, cohort slot) pairs for mapped columns."""
        return [
            (N_FIXED_COLUMNS + offset, int(slot))
            for offset, slot in enumerate(self.slots)
            if slot != UNMAPPED
        ]


def build_column_mapping(
    header_columns: Sequence[str], registry: SampleRegistry
) -> ColumnMapping:
    """Map the sample columns of a VCF header line onto cohort slots.

    Args:
        header_columns: Tab-split ``#CHROM`` header line.
        registry: Analysis cohort.

    Returns:
        ColumnMapping with one slot per sample column.

    Raises:
        ValueError: If the header is empty, has no sample columns, repeats a
            cohort sample, or the number of resolved columns differs from the
            cohort size.
    """
    if len(header_columns) == 0:
        raise ValueError("No header line detected!")
    if len(header_columns) < N_FIXED_COLUMNS + 1:
        raise ValueError(
            f"Wrong VCF header format for sample ids: expected at least "
            f"{N_FIXED_COLUMNS + 1} columns, got {len(header_columns)}"
        )

    labels = header_columns[N_FIXED_COLUMNS:]
    slots = np.full(len(labels), UNMAPPED, dtype=np.intp)
    n_included = n_excluded = n_missing = 0

    for offset, label in enumerate(labels):
        if not registry.is_member(label):
            n_excluded += 1
            continue
        idx = registry.index_of(label)
        if idx is None:
            n_missing += 1
        elif idx in slots:
            raise ValueError(
                f"Sample '{label}' appears more than once in VCF header"
            )
        else:
            slots[offset] = idx
            n_included += 1

    if n_included != registry.sample_count:
        raise ValueError(
            f"Genotype data does not overlap with phenotype data: "
            f"{n_included}/{registry.sample_count} cohort samples found in "
            f"VCF header, check your files!"
        )

    logger.debug(
        f"Column mapping: {n_included} included, {n_excluded} excluded, "
        f"{n_missing} without phenotype data"
    )
    return ColumnMapping(
        slots=slots,
        n_included=n_included,
        n_excluded=n_excluded,
        n_missing=n_missing,
    )
