"""Streaming genotype reader for one genomic region.

Reconciles the VCF header against the analysis cohort, then makes a single
pass over the region's lines. Every line ends in exactly one outcome: an
accepted VariantRecord, or a RejectReason that is tallied and reported in
the end-of-run summary. Malformed data raises immediately and aborts the
region.

Example:
    >>> registry = SampleRegistry(["S1", "S2", "S3"])
    >>> data = read_genotypes_vcf(
    ...     Path("chr22.vcf.gz"), Region.parse("22:16000000-17000000"),
    ...     registry, FilterConfig(maf_threshold=0.01),
    ... )
    >>> print(f"{data.n_variants} variants x {data.n_samples} samples")
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from loguru import logger

from genoscan.core.allele_stats import (
    compute_allele_stats,
    count_genotype_classes,
    round_genotype_classes,
)
from genoscan.core.config import FilterConfig
from genoscan.core.dosage import extract_dosages
from genoscan.core.progress import progress_iterator
from genoscan.core.records import (
    CHROM,
    FORMAT,
    ID,
    INFO,
    POS,
    passes_global_af,
    resolve_format,
    tokenize_record,
)
from genoscan.core.samples import ColumnMapping, SampleRegistry, build_column_mapping
from genoscan.core.snp_filter import RejectReason, VariantSelector, passes_thresholds
from genoscan.core.stratify import (
    compute_interaction_median,
    stratified_mafs,
    upper_half_mask,
)
from genoscan.io.vcf import Region, RegionReader, TabixRegionReader

PROGRESS_INTERVAL = 100_000


@dataclass
class VariantRecord:
    """An accepted variant.

    Attributes:
        variant_id: VCF ID column.
        chrom: Chromosome.
        pos: 1-based position.
        dosages: Alternate allele dosages in cohort order (-1 for missing).
        working: Zero-initialized buffer of the same shape, reserved for
            downstream transformations (normalization, residualization).
        maf: Minor allele frequency.
        ma_count: Copies of the minor allele.
        ma_samples: Samples carrying the minor allele.
        ref_factor: +1 if the alternate allele is minor, -1 otherwise.
    """

    variant_id: str
    chrom: str
    pos: int
    dosages: np.ndarray
    working: np.ndarray
    maf: float
    ma_count: int
    ma_samples: int
    ref_factor: int


@dataclass
class ScanSummary:
    """Counts reported at the end of a region scan."""

    n_parsed: int = 0
    n_included: int = 0
    n_samples_included: int = 0
    n_samples_excluded: int = 0
    n_samples_missing: int = 0
    rejected: Counter = field(default_factory=Counter)

    def record(self, outcome: VariantRecord | RejectReason) -> None:
        self.n_parsed += 1
        if isinstance(outcome, RejectReason):
            self.rejected[outcome] += 1
        else:
            self.n_included += 1


@dataclass
class GenotypeData:
    """Accepted variants of one region.

    Attributes:
        records: Accepted variants in file order.
        sample_ids: Cohort sample IDs (order of every dosage vector).
        summary: Line and sample tallies of the scan.
    """

    records: list[VariantRecord]
    sample_ids: tuple[str, ...]
    summary: ScanSummary

    @property
    def n_samples(self) -> int:
        """Number of cohort samples."""
        return len(self.sample_ids)

    @property
    def n_variants(self) -> int:
        """Number of accepted variants."""
        return len(self.records)

    @property
    def dosage_matrix(self) -> np.ndarray:
        """Dosages as an (n_samples, n_variants) float32 matrix."""
        if not self.records:
            return np.empty((self.n_samples, 0), dtype=np.float32)
        return np.column_stack([r.dosages for r in self.records])


class GenotypeScanner:
    """Per-region scanning state.

    The cohort median of the interaction covariate is computed once at
    construction; the column mapping is built from the header by prepare().

    Args:
        registry: Analysis cohort.
        config: Filter thresholds.
        interaction_val: Per-sample interaction covariate in cohort order.
            Required when config.stratified is True.
        selector: Optional variant ID include/exclude lists.

    Raises:
        ValueError: If stratification is enabled without a covariate of
            length registry.sample_count.
    """

    def __init__(
        self,
        registry: SampleRegistry,
        config: FilterConfig,
        interaction_val: np.ndarray | None = None,
        selector: VariantSelector | None = None,
    ) -> None:
        self.registry = registry
        self.config = config
        self.selector = selector or VariantSelector()
        self.mapping: ColumnMapping | None = None
        self._resolved: list[tuple[int, int]] = []
        self.median_interaction = 0.0
        self._upper: np.ndarray | None = None

        if config.stratified:
            if interaction_val is None:
                raise ValueError(
                    "interaction_maf_threshold > 0 requires interaction values"
                )
            interaction_val = np.asarray(interaction_val, dtype=np.float64)
            if interaction_val.shape != (registry.sample_count,):
                raise ValueError(
                    f"Interaction values have length {interaction_val.size} "
                    f"but cohort has {registry.sample_count} samples"
                )
            self.median_interaction = compute_interaction_median(interaction_val)
            self._upper = upper_half_mask(interaction_val, self.median_interaction)
            logger.info(f"  * interaction median = {self.median_interaction:g}")

    def prepare(self, header_columns: list[str]) -> ColumnMapping:
        """Reconcile the VCF header with the cohort."""
        self.mapping = build_column_mapping(header_columns, self.registry)
        self._resolved = self.mapping.resolved()
        return self.mapping

    def process_line(self, line: str) -> VariantRecord | RejectReason:
        """Run every per-line stage, stopping at the first rejection.

        Raises:
            RuntimeError: If prepare() has not been called.
            ValueError: If the line holds malformed genotype data.
        """
        if self.mapping is None:
            raise RuntimeError("prepare() must be called before process_line()")

        columns = tokenize_record(line)
        if not self.selector(columns[ID]):
            return RejectReason.EXCLUDED_VARIANT

        field_format = resolve_format(columns[FORMAT])
        if field_format is None:
            return RejectReason.MISSING_FORMAT

        if self.config.global_af_enabled and not passes_global_af(
            columns[INFO], self.config.global_af_threshold
        ):
            return RejectReason.GLOBAL_AF

        dosages = extract_dosages(
            columns, self._resolved, field_format, self.registry.sample_count
        )
        classes = round_genotype_classes(dosages)
        stats = compute_allele_stats(count_genotype_classes(classes))

        maf_lower = maf_upper = 0.0
        if self._upper is not None:
            maf_lower, maf_upper = stratified_mafs(classes, self._upper)

        if not passes_thresholds(stats, maf_lower, maf_upper, self.config):
            return RejectReason.THRESHOLD

        return VariantRecord(
            variant_id=columns[ID],
            chrom=columns[CHROM],
            pos=int(columns[POS]),
            dosages=dosages,
            working=np.zeros_like(dosages),
            maf=stats.maf,
            ma_count=stats.ma_count,
            ma_samples=stats.ma_samples,
            ref_factor=stats.ref_factor,
        )

    def scan(
        self,
        reader: RegionReader,
        region_label: str = "",
        show_progress: bool = True,
    ) -> GenotypeData:
        """Scan one region and collect the accepted variants.

        Args:
            reader: Open region reader.
            region_label: Region descriptor used in log and error messages.
            show_progress: Whether to show a progress bar over lines.

        Returns:
            GenotypeData with accepted variants in file order.

        Raises:
            ValueError: On header/cohort mismatch, malformed genotype data,
                or when no variant passes the filters.
        """
        mapping = self.prepare(reader.header_columns())
        summary = ScanSummary(
            n_samples_included=mapping.n_included,
            n_samples_excluded=mapping.n_excluded,
            n_samples_missing=mapping.n_missing,
        )
        records: list[VariantRecord] = []

        lines: Iterator[str] = reader.lines()
        if show_progress:
            lines = progress_iterator(lines, desc="Scanning variants")

        for line in lines:
            if not line.strip():
                continue
            try:
                outcome = self.process_line(line)
            except ValueError as e:
                raise ValueError(
                    f"{e} (line {summary.n_parsed + 1} of region {region_label})"
                ) from e
            summary.record(outcome)
            if isinstance(outcome, VariantRecord):
                records.append(outcome)
            if summary.n_parsed % PROGRESS_INTERVAL == 0:
                logger.info(f"  * {summary.n_parsed} lines parsed")

        log_summary(summary, self.config)
        if summary.n_included == 0:
            raise ValueError(f"No genotypes in this region: {region_label}")

        return GenotypeData(
            records=records,
            sample_ids=self.registry.sample_ids,
            summary=summary,
        )


def log_summary(summary: ScanSummary, config: FilterConfig) -> None:
    """Log the end-of-scan sample and site counts."""
    logger.info(f"  * {summary.n_samples_included} samples included")
    if summary.n_samples_excluded > 0:
        logger.info(f"  * {summary.n_samples_excluded} samples excluded")
    if summary.n_samples_missing > 0:
        logger.info(
            f"  * {summary.n_samples_missing} samples excluded without phenotype data"
        )
    logger.info(f"  * {summary.n_included} sites included")
    for reason in RejectReason:
        count = summary.rejected[reason]
        if count == 0:
            continue
        message = f"  * {count} {reason.description}"
        if reason is RejectReason.GLOBAL_AF:
            message += f" < {config.global_af_threshold:g}"
        logger.info(message)


def read_genotypes_vcf(
    vcf_path: Path,
    region: Region,
    registry: SampleRegistry,
    config: FilterConfig,
    interaction_val: np.ndarray | None = None,
    selector: VariantSelector | None = None,
    show_progress: bool = True,
) -> GenotypeData:
    """Read and filter the genotypes of one region of an indexed VCF.

    Args:
        vcf_path: bgzip-compressed VCF with a .tbi or .csi index.
        region: Region to scan.
        registry: Analysis cohort.
        config: Filter thresholds.
        interaction_val: Interaction covariate in cohort order; required when
            config.interaction_maf_threshold > 0.
        selector: Optional variant ID include/exclude lists.
        show_progress: Whether to show a progress bar over lines.

    Returns:
        GenotypeData with accepted variants in file order.

    Raises:
        FileNotFoundError: If the VCF or its index is missing.
        ValueError: On header/cohort mismatch, unreadable region, malformed
            genotype data, or when no variant passes the filters.
    """
    logger.info(f"Reading genotype data in [{vcf_path}] in VCF format")
    scanner = GenotypeScanner(registry, config, interaction_val, selector)
    with TabixRegionReader(vcf_path, region) as reader:
        return scanner.scan(
            reader, region_label=str(region), show_progress=show_progress
        )
