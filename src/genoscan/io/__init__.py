"""I/O modules for genoscan.

This package contains modules for reading the scanner's inputs:
- vcf: Region-bounded reading of tabix-indexed VCF files
- id_list: Cohort, sample and variant ID lists
- interaction: Interaction covariate file reading
"""

from genoscan.io.id_list import read_id_list_file, read_sample_ids
from genoscan.io.interaction import read_interaction_file
from genoscan.io.vcf import Region, RegionReader, TabixRegionReader, find_index

__all__ = [
    "Region",
    "RegionReader",
    "TabixRegionReader",
    "find_index",
    "read_id_list_file",
    "read_interaction_file",
    "read_sample_ids",
]
