"""Shared variant filtering utilities for genoscan.

Each scanned line ends in exactly one outcome: an accepted variant or one
RejectReason. Reasons are tallied per region and reported in the summary.
"""

from collections.abc import Iterable
from enum import Enum

from genoscan.core.allele_stats import AlleleStats
from genoscan.core.config import FilterConfig


class RejectReason(str, Enum):
    """Why a line was skipped; mutually exclusive per line."""

    EXCLUDED_VARIANT = "excluded_variant"
    MISSING_FORMAT = "missing_format"
    GLOBAL_AF = "global_af"
    THRESHOLD = "threshold"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    RejectReason.EXCLUDED_VARIANT: "sites excluded",
    RejectReason.MISSING_FORMAT: "sites excluded because of missing GT/DS field",
    RejectReason.GLOBAL_AF: "sites excluded because global minor allele frequency",
    RejectReason.THRESHOLD: (
        "sites excluded because below minor allele thresholds for selected samples"
    ),
}


class VariantSelector:
    """Variant ID include/exclude lists.

    Args:
        include: If given, only these variant IDs are scanned.
        exclude: Variant IDs skipped.
    """

    def __init__(
        self,
        include: Iterable[str] | None = None,
        exclude: Iterable[str] | None = None,
    ) -> None:
        self.include = frozenset(include) if include is not None else None
        self.exclude = frozenset(exclude) if exclude is not None else frozenset()

    def __call__(self, variant_id: str) -> bool:
        if self.include is not None and variant_id not in self.include:
            return False
        return variant_id not in self.exclude


def passes_thresholds(
    stats: AlleleStats,
    maf_lower: float,
    maf_upper: float,
    config: FilterConfig,
) -> bool:
    """Apply MAF, minor allele sample count and stratified MAF thresholds.

    maf_lower and maf_upper are 0.0 when stratification is disabled, which
    passes the disabled (0.0) threshold. NaN frequencies fail every check.
    """
    return (
        stats.maf >= config.maf_threshold
        and stats.ma_samples >= config.ma_sample_threshold
        and maf_lower >= config.interaction_maf_threshold
        and maf_upper >= config.interaction_maf_threshold
    )
