"""Covariate-stratified allele frequencies.

When interaction filtering is enabled the cohort is split at the median of
the interaction covariate. A variant must be common enough in both halves,
otherwise the interaction term cannot be estimated.
"""

import numpy as np

from genoscan.core.allele_stats import count_genotype_classes


def compute_interaction_median(values: np.ndarray) -> float:
    """Median of the interaction covariate.

    Middle element for odd length, mean of the two central elements for even
    length.

    Raises:
        ValueError: If values is empty or contains NaN.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Interaction covariate is empty")
    if np.isnan(values).any():
        raise ValueError("Interaction covariate contains missing values")
    ordered = np.sort(values)
    mid = ordered.size // 2
    if ordered.size % 2 == 0:
        return float((ordered[mid - 1] + ordered[mid]) / 2.0)
    return float(ordered[mid])


def upper_half_mask(values: np.ndarray, median: float) -> np.ndarray:
    """Boolean mask of samples at or above the median."""
    return np.asarray(values, dtype=np.float64) >= median


def folded_frequency(counts: np.ndarray) -> float:
    """Alternate allele frequency folded to the minor allele convention.

    Returns NaN when the counts hold no samples.
    """
    n = int(counts.sum())
    if n == 0:
        return float("nan")
    freq = (counts[1] + 2 * counts[2]) / (2 * n)
    if freq > 0.5:
        freq = 1.0 - freq
    return float(freq)


def stratified_mafs(classes: np.ndarray, upper: np.ndarray) -> tuple[float, float]:
    """Minor allele frequency in the lower and upper covariate halves.

    Args:
        classes: Genotype classes (-1 for missing) in cohort order.
        upper: Mask from upper_half_mask.

    Returns:
        Tuple of (maf_lower, maf_upper).
    """
    maf_upper = folded_frequency(count_genotype_classes(classes[upper]))
    maf_lower = folded_frequency(count_genotype_classes(classes[~upper]))
    return maf_lower, maf_upper
