"""Per-variant allele statistics.

Dosages are rounded to genotype classes (0, 1 or 2 copies of the alternate
allele) and counted. The minor allele is the side with fewer allele copies
among non-missing samples; ties make the alternate allele minor.
"""

from dataclasses import dataclass

import numpy as np

from genoscan.core.dosage import MISSING_DOSAGE


@dataclass(frozen=True)
class AlleleStats:
    """Minor allele summary of one variant.

    Attributes:
        maf: Minor allele frequency (NaN when every sample is missing).
        ma_count: Copies of the minor allele.
        ma_samples: Samples carrying at least one minor allele.
        ref_factor: +1 when the alternate allele is minor, -1 when the
            reference allele is minor.
        n_samples: Non-missing samples.
    """

    maf: float
    ma_count: int
    ma_samples: int
    ref_factor: int
    n_samples: int


def round_genotype_classes(dosages: np.ndarray) -> np.ndarray:
    """Round non-missing dosages half away from zero into genotype classes.

    Args:
        dosages: Dosage vector with MISSING_DOSAGE for missing samples.

    Returns:
        int array of the same length; missing samples hold -1.

    Raises:
        ValueError: If a rounded dosage lies outside {0, 1, 2}.
    """
    missing = dosages == MISSING_DOSAGE
    values = dosages.astype(np.float64)
    classes = (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)
    bad = ~missing & ((classes < 0) | (classes > 2))
    if bad.any():
        raise ValueError(
            f"Dosage values must be between 0 and 2, got {dosages[bad][0]}"
        )
    classes[missing] = -1
    return classes


def count_genotype_classes(classes: np.ndarray) -> np.ndarray:
    """Return ``[c0, c1, c2]`` for the non-missing entries of a class vector."""
    return np.bincount(classes[classes >= 0], minlength=3)[:3]


def compute_allele_stats(counts: np.ndarray) -> AlleleStats:
    """Derive the minor allele summary from genotype class counts.

    Args:
        counts: Three-element ``[c0, c1, c2]`` array.

    Returns:
        AlleleStats for the variant.
    """
    c0, c1, c2 = (int(c) for c in counts)
    n = c0 + c1 + c2
    ref_alleles = 2 * c0 + c1
    alt_alleles = c1 + 2 * c2

    if ref_alleles >= alt_alleles:
        minor, ma_samples, ref_factor = alt_alleles, c1 + c2, 1
    else:
        minor, ma_samples, ref_factor = ref_alleles, c0 + c1, -1

    maf = minor / (2 * n) if n > 0 else float("nan")
    return AlleleStats(
        maf=maf,
        ma_count=minor,
        ma_samples=ma_samples,
        ref_factor=ref_factor,
        n_samples=n,
    )
