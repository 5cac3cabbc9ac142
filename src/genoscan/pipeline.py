"""Pipeline orchestration for a genoscan region scan.

Provides a single PipelineRunner service class that encapsulates the shared
scan pipeline: validate inputs, load the cohort and ID lists, load the
interaction covariate, scan the region. The CLI (cli.py) delegates to this
runner; library users can call it directly.

Example:
    >>> from genoscan.pipeline import PipelineConfig, PipelineRunner
    >>> config = PipelineConfig(
    ...     vcf=Path("chr22.vcf.gz"), region="22", samples_file=Path("cohort.txt")
    ... )
    >>> result = PipelineRunner(config).run()
    >>> print(f"Kept {result.data.n_variants} variants")
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from loguru import logger

from genoscan.core.config import FilterConfig
from genoscan.core.samples import SampleRegistry
from genoscan.core.snp_filter import VariantSelector
from genoscan.io.id_list import read_id_list_file, read_sample_ids
from genoscan.io.interaction import read_interaction_file
from genoscan.io.vcf import Region, find_index
from genoscan.reader import GenotypeData, read_genotypes_vcf


@dataclass
class PipelineConfig:
    """Configuration for a region scan.

    Attributes:
        vcf: bgzip-compressed, tabix-indexed VCF.
        region: Region descriptor (``chr``, ``chr:start`` or ``chr:start-end``).
        samples_file: Ordered cohort sample IDs, one per line.
        include_samples: Optional list of samples to keep.
        exclude_samples: Optional list of samples to drop.
        include_sites: Optional list of variant IDs to keep.
        exclude_sites: Optional list of variant IDs to drop.
        interaction_file: Interaction covariate (sample ID, value) file.
        maf_threshold: Minimum minor allele frequency.
        ma_sample_threshold: Minimum samples carrying the minor allele.
        global_af_threshold: INFO AF band for near-fixed sites, 0 disables.
        interaction_maf_threshold: Per-half minimum MAF, 0 disables.
        show_progress: If True, show a progress bar over lines.
    """

    vcf: Path
    region: str
    samples_file: Path
    include_samples: Path | None = None
    exclude_samples: Path | None = None
    include_sites: Path | None = None
    exclude_sites: Path | None = None
    interaction_file: Path | None = None
    maf_threshold: float = 0.0
    ma_sample_threshold: int = 0
    global_af_threshold: float = 0.0
    interaction_maf_threshold: float = 0.0
    show_progress: bool = True


@dataclass
class PipelineResult:
    """Result of a pipeline run.

    Attributes:
        data: Accepted variants of the region.
        region: Parsed region.
        timing: Timing breakdown by pipeline phase.
    """

    data: GenotypeData
    region: Region
    timing: dict[str, float] = field(default_factory=dict)


class PipelineRunner:
    """Orchestrates a region scan.

    Raises exceptions (ValueError, FileNotFoundError) rather than calling
    sys.exit or typer.Exit. The CLI wrapper catches these and converts to
    user-friendly error messages.

    Args:
        config: Pipeline configuration.
    """

    def __init__(self, config: PipelineConfig) -> None:
        self.config = config

    def validate_inputs(self) -> tuple[Region, FilterConfig]:
        """Validate input files and thresholds.

        Returns:
            Tuple of (parsed region, filter configuration).

        Raises:
            FileNotFoundError: If the VCF, its index, or a given list or
                interaction file is missing.
            ValueError: If the region or a threshold is invalid, or the
                interaction file is missing while stratification is enabled.
        """
        find_index(self.config.vcf)
        region = Region.parse(self.config.region)
        filter_config = FilterConfig(
            maf_threshold=self.config.maf_threshold,
            ma_sample_threshold=self.config.ma_sample_threshold,
            global_af_threshold=self.config.global_af_threshold,
            interaction_maf_threshold=self.config.interaction_maf_threshold,
        )

        for label, path in (
            ("Sample", self.config.samples_file),
            ("Include samples", self.config.include_samples),
            ("Exclude samples", self.config.exclude_samples),
            ("Include sites", self.config.include_sites),
            ("Exclude sites", self.config.exclude_sites),
            ("Interaction", self.config.interaction_file),
        ):
            if path is not None and not path.exists():
                raise FileNotFoundError(f"{label} file not found: {path}")

        if filter_config.stratified and self.config.interaction_file is None:
            raise ValueError(
                "interaction_maf_threshold > 0 requires an interaction file"
            )

        return region, filter_config

    def load_registry(self) -> SampleRegistry:
        """Load the cohort and its include/exclude lists."""
        sample_ids = read_sample_ids(self.config.samples_file)
        include = (
            read_id_list_file(self.config.include_samples)
            if self.config.include_samples is not None
            else None
        )
        exclude = (
            read_id_list_file(self.config.exclude_samples)
            if self.config.exclude_samples is not None
            else None
        )
        logger.info(f"Loaded {len(sample_ids)} cohort samples")
        return SampleRegistry(sample_ids, include=include, exclude=exclude)

    def load_selector(self) -> VariantSelector:
        """Load the variant ID include/exclude lists."""
        include = (
            read_id_list_file(self.config.include_sites)
            if self.config.include_sites is not None
            else None
        )
        exclude = (
            read_id_list_file(self.config.exclude_sites)
            if self.config.exclude_sites is not None
            else None
        )
        return VariantSelector(include=include, exclude=exclude)

    def load_interaction(
        self, registry: SampleRegistry, filter_config: FilterConfig
    ) -> np.ndarray | None:
        """Load the interaction covariate when stratification is enabled."""
        if not filter_config.stratified:
            return None
        logger.info(f"Loading interaction values from {self.config.interaction_file}")
        return read_interaction_file(self.config.interaction_file, registry.sample_ids)

    def run(self) -> PipelineResult:
        """Execute the scan.

        Pipeline steps:
        1. Validate inputs
        2. Load cohort and ID lists
        3. Load interaction covariate
        4. Scan the region

        Returns:
            PipelineResult with accepted variants and timing.
        """
        t_start = time.perf_counter()

        region, filter_config = self.validate_inputs()
        registry = self.load_registry()
        selector = self.load_selector()
        interaction_val = self.load_interaction(registry, filter_config)
        load_s = time.perf_counter() - t_start

        t_scan = time.perf_counter()
        data = read_genotypes_vcf(
            self.config.vcf,
            region,
            registry,
            filter_config,
            interaction_val=interaction_val,
            selector=selector,
            show_progress=self.config.show_progress,
        )
        scan_s = time.perf_counter() - t_scan

        total_s = time.perf_counter() - t_start
        logger.info(
            f"Scan complete: {data.n_variants} of {data.summary.n_parsed} "
            f"variants kept in {total_s:.1f}s"
        )

        return PipelineResult(
            data=data,
            region=region,
            timing={"load_s": load_s, "scan_s": scan_s, "total_s": total_s},
        )
