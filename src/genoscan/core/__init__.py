"""Core computational modules for genoscan.

This package contains the per-line scanning stages:
- config: Filter thresholds and output configuration
- samples: Cohort registry and header column mapping
- records: Line tokenization, FORMAT resolution, INFO AF prefilter
- dosage: Per-sample dosage extraction
- allele_stats: Genotype class counts and minor allele statistics
- stratify: Interaction covariate median and per-half frequencies
- snp_filter: Threshold checks and rejection reasons
"""

from genoscan.core.allele_stats import (
    AlleleStats,
    compute_allele_stats,
    count_genotype_classes,
    round_genotype_classes,
)
from genoscan.core.config import FilterConfig, OutputConfig
from genoscan.core.dosage import (
    MISSING_DOSAGE,
    GenotypeCall,
    extract_dosages,
    parse_genotype_call,
)
from genoscan.core.samples import ColumnMapping, SampleRegistry, build_column_mapping
from genoscan.core.snp_filter import RejectReason, VariantSelector, passes_thresholds
from genoscan.core.stratify import compute_interaction_median, stratified_mafs

__all__ = [
    "AlleleStats",
    "ColumnMapping",
    "FilterConfig",
    "GenotypeCall",
    "MISSING_DOSAGE",
    "OutputConfig",
    "RejectReason",
    "SampleRegistry",
    "VariantSelector",
    "build_column_mapping",
    "compute_allele_stats",
    "compute_interaction_median",
    "count_genotype_classes",
    "extract_dosages",
    "parse_genotype_call",
    "passes_thresholds",
    "round_genotype_classes",
    "stratified_mafs",
]
