"""Configuration dataclasses for genoscan.

This module contains dataclasses that configure variant filtering thresholds
and output paths for the run log.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FilterConfig:
    """Thresholds applied to every variant in the scanned region.

    Attributes:
        maf_threshold: Minimum minor allele frequency across cohort samples.
        ma_sample_threshold: Minimum number of samples carrying the minor allele.
        global_af_threshold: Reject sites whose INFO ``AF`` lies below this
            value or above ``1 - global_af_threshold``. 0 disables.
        interaction_maf_threshold: Minimum minor allele frequency required in
            both halves of the cohort split at the interaction covariate
            median. 0 disables stratification.

    Raises:
        ValueError: If a threshold is outside its valid range.
    """

    maf_threshold: float = 0.0
    ma_sample_threshold: int = 0
    global_af_threshold: float = 0.0
    interaction_maf_threshold: float = 0.0

    def __post_init__(self) -> None:
        for name in ("maf_threshold", "interaction_maf_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 0.5:
                raise ValueError(f"{name} must be in [0, 0.5], got {value}")
        if not 0.0 <= self.global_af_threshold < 0.5:
            raise ValueError(
                f"global_af_threshold must be in [0, 0.5), got "
                f"{self.global_af_threshold}"
            )
        if self.ma_sample_threshold < 0:
            raise ValueError(
                f"ma_sample_threshold must be >= 0, got {self.ma_sample_threshold}"
            )

    @property
    def stratified(self) -> bool:
        """Whether covariate-stratified frequency filtering is enabled."""
        return self.interaction_maf_threshold > 0.0

    @property
    def global_af_enabled(self) -> bool:
        """Whether the INFO AF prefilter is enabled."""
        return self.global_af_threshold > 0.0


@dataclass
class OutputConfig:
    """Configuration for output files and directories.

    Attributes:
        outdir: Output directory for the run log. Created if it doesn't exist.
        prefix: Prefix for output filenames (e.g., "result" produces "result.log.txt").
        verbose: Enable verbose/debug output to console.
    """

    outdir: Path = field(default_factory=lambda: Path("output"))
    prefix: str = "result"
    verbose: bool = False

    @property
    def log_path(self) -> Path:
        """Path to the run log file.

        Returns:
            Path to {outdir}/{prefix}.log.txt
        """
        return self.outdir / f"{self.prefix}.log.txt"

    def ensure_outdir(self) -> None:
        """Create output directory if it doesn't exist."""
        self.outdir.mkdir(parents=True, exist_ok=True)
