"""Region-bounded reading of bgzip-compressed, tabix-indexed VCF files.

The scanner only needs two things from a reader: the tab-split ``#CHROM``
header line and an iterator over the body lines of one region. Any object
providing ``header_columns()`` and ``lines()`` can be scanned.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pysam
from loguru import logger

_REGION_PATTERN = re.compile(r"^([^:\s]+)(?::(\d[\d,]*)(?:-(\d[\d,]*))?)?$")


@dataclass(frozen=True)
class Region:
    """A genomic interval with 1-based inclusive coordinates.

    Attributes:
        chrom: Contig name.
        start: First position, or None for the contig start.
        end: Last position, or None for the contig end.
    """

    chrom: str
    start: int | None = None
    end: int | None = None

    @classmethod
    def parse(cls, descriptor: str) -> Region:
        """Parse ``chr``, ``chr:start`` or ``chr:start-end``.

        Raises:
            ValueError: If the descriptor is malformed or start > end.
        """
        match = _REGION_PATTERN.match(descriptor.strip())
        if match is None:
            raise ValueError(f"Invalid region descriptor: '{descriptor}'")
        chrom, start, end = match.groups()
        start_pos = int(start.replace(",", "")) if start else None
        end_pos = int(end.replace(",", "")) if end else None
        if start_pos is not None and start_pos < 1:
            raise ValueError(f"Region start must be >= 1: '{descriptor}'")
        if start_pos is not None and end_pos is not None and start_pos > end_pos:
            raise ValueError(f"Region start exceeds end: '{descriptor}'")
        return cls(chrom=chrom, start=start_pos, end=end_pos)

    def __str__(self) -> str:
        if self.start is None:
            return self.chrom
        if self.end is None:
            return f"{self.chrom}:{self.start}"
        return f"{self.chrom}:{self.start}-{self.end}"


class RegionReader(Protocol):
    """Interface consumed by the genotype scanner."""

    def header_columns(self) -> list[str]: ...

    def lines(self) -> Iterator[str]: ...


def find_index(vcf_path: Path) -> Path:
    """Return the tabix (.tbi) or CSI (.csi) index of a VCF.

    Raises:
        FileNotFoundError: If the VCF or its index does not exist.
    """
    vcf_path = Path(vcf_path)
    if not vcf_path.exists():
        raise FileNotFoundError(f"VCF file not found: {vcf_path}")
    for suffix in (".tbi", ".csi"):
        candidate = Path(f"{vcf_path}{suffix}")
        if candidate.exists():
            return candidate
    raise FileNotFoundError(f"index file missing [{vcf_path}.tbi]")


class TabixRegionReader:
    """Read the header and one region of an indexed VCF.

    Use as a context manager so the underlying file handle is released on
    every exit path, including errors raised while scanning.

    Args:
        vcf_path: Path to the bgzip-compressed VCF.
        region: Region to fetch.

    Raises:
        FileNotFoundError: If the VCF or its index is missing.

    Example:
        >>> with TabixRegionReader(Path("chr1.vcf.gz"), Region.parse("1:1-5000")) as r:
        ...     header = r.header_columns()
        ...     n_lines = sum(1 for _ in r.lines())
    """

    def __init__(self, vcf_path: Path, region: Region) -> None:
        self.vcf_path = Path(vcf_path)
        self.region = region
        self.index_path = find_index(self.vcf_path)
        self._tabix: pysam.TabixFile | None = None

    def __enter__(self) -> TabixRegionReader:
        self._tabix = pysam.TabixFile(str(self.vcf_path), index=str(self.index_path))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._tabix is not None:
            self._tabix.close()
            self._tabix = None

    @property
    def tabix(self) -> pysam.TabixFile:
        if self._tabix is None:
            raise RuntimeError("TabixRegionReader used outside of a with block")
        return self._tabix

    def header_columns(self) -> list[str]:
        """Return the last header line split on tabs, or [] if there is none."""
        last = ""
        for line in self.tabix.header:
            last = line
        if not last:
            return []
        return last.rstrip("\r\n").split("\t")

    def lines(self) -> Iterator[str]:
        """Yield the body lines overlapping the region, in file order.

        Raises:
            ValueError: If the region cannot be fetched from the index.
        """
        start = self.region.start - 1 if self.region.start is not None else None
        try:
            iterator = self.tabix.fetch(self.region.chrom, start, self.region.end)
        except ValueError as e:
            raise ValueError(
                f"Failed to get region {self.region} in [{self.vcf_path}]"
            ) from e
        logger.info(f"  * region = {self.region}")
        yield from iterator
