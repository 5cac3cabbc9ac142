"""genoscan: region-bounded genotype reading and variant filtering.

genoscan reads the genotypes of one region of a tabix-indexed VCF, aligns
them to an analysis cohort and keeps the variants that pass minor allele
frequency, minor allele sample count, population AF and covariate-stratified
frequency thresholds. Accepted variants are handed to a downstream
association engine as dosage vectors.

Example:
    >>> from genoscan import FilterConfig, Region, SampleRegistry, read_genotypes_vcf
    >>> data = read_genotypes_vcf(
    ...     "chr22.vcf.gz", Region.parse("22"), SampleRegistry(["S1", "S2"]),
    ...     FilterConfig(maf_threshold=0.05),
    ... )
    >>> print(f"{data.n_variants} variants kept")
"""

import sys
from importlib.metadata import version

from loguru import logger

__version__ = version("genoscan")

# Configure loguru with sensible defaults on import
# Users can override by calling logger.remove()/add()
logger.remove()
logger.add(
    sys.stdout,
    level="INFO",
    format="{time:HH:mm:ss} | <level>{level: <8}</level> | {message}",
    colorize=True,
)

from genoscan.core import FilterConfig, SampleRegistry, VariantSelector  # noqa: E402
from genoscan.io import Region  # noqa: E402
from genoscan.reader import (  # noqa: E402
    GenotypeData,
    VariantRecord,
    read_genotypes_vcf,
)

__all__ = [
    "FilterConfig",
    "GenotypeData",
    "Region",
    "SampleRegistry",
    "VariantRecord",
    "VariantSelector",
    "read_genotypes_vcf",
    "__version__",
]
