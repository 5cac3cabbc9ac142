"""Pytest fixtures for genoscan test suite."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

import pytest

# =============================================================================
# Test Tier System
# =============================================================================
#
# tier0 - Fast Unit Tests (<5s each)
#   - Pure computation tests on in-memory lines and small tmp files
#   - Run: pytest -m tier0
#
# tier1 - Indexed VCF Tests
#   - Build bgzip-compressed, tabix-indexed VCFs with pysam and scan them
#     end to end (reader, pipeline, CLI)
#   - Run: pytest -m tier1
# =============================================================================

HEADER_PREFIX = [
    "#CHROM",
    "POS",
    "ID",
    "REF",
    "ALT",
    "QUAL",
    "FILTER",
    "INFO",
    "FORMAT",
]


def vcf_header(samples: Sequence[str]) -> list[str]:
    """Tab-split #CHROM header line for the given samples."""
    return HEADER_PREFIX + list(samples)


def vcf_line(
    pos: int,
    values: Sequence[str],
    *,
    chrom: str = "1",
    vid: str | None = None,
    fmt: str = "GT",
    info: str = ".",
) -> str:
    """Build one VCF body line."""
    columns = [
        chrom,
        str(pos),
        vid if vid is not None else f"rs{pos}",
        "A",
        "G",
        ".",
        "PASS",
        info,
        fmt,
        *values,
    ]
    return "\t".join(columns)


class InMemoryReader:
    """Region reader over a header and a list of lines."""

    def __init__(self, header: list[str], lines: Sequence[str]) -> None:
        self._header = header
        self._lines = list(lines)

    def header_columns(self) -> list[str]:
        return self._header

    def lines(self) -> Iterator[str]:
        yield from self._lines


def write_indexed_vcf(
    directory: Path,
    samples: Sequence[str],
    lines: Sequence[str],
    name: str = "test.vcf",
) -> Path:
    """Write, bgzip-compress and tabix-index a small VCF.

    Returns:
        Path to the .vcf.gz file (index at <path>.tbi).
    """
    import pysam

    plain = directory / name
    with open(plain, "w") as f:
        f.write("##fileformat=VCFv4.2\n")
        f.write("##contig=<ID=1>\n")
        f.write("##contig=<ID=2>\n")
        f.write('##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">\n')
        f.write('##FORMAT=<ID=DS,Number=1,Type=Float,Description="Dosage">\n')
        f.write("\t".join(vcf_header(samples)) + "\n")
        for line in lines:
            f.write(line + "\n")
    gz = Path(f"{plain}.gz")
    pysam.tabix_compress(str(plain), str(gz), force=True)
    pysam.tabix_index(str(gz), preset="vcf", force=True)
    return gz


@pytest.fixture
def cohort() -> list[str]:
    """Cohort sample IDs used across tests."""
    return ["S1", "S2", "S3", "S4"]


@pytest.fixture
def small_vcf(tmp_path: Path, cohort: list[str]) -> Path:
    """Indexed VCF with four cohort samples, one extra sample and five sites.

    Sites (cohort genotypes, extra sample last):
        1:100  0/0 0/1 0/1 1/1   MAF 0.5
        1:200  0/0 0/0 0/0 0/1   MAF 0.125
        1:300  DS 0.1 1.7 2.0 .  MAF 1/3 (reference allele minor)
        1:400  no GT/DS field
        2:100  0/1 0/0 0/0 0/0   AF=0.01 in INFO
    """
    samples = [*cohort, "EXTRA"]
    lines = [
        vcf_line(100, ["0/0", "0/1", "0|1", "1/1", "1/1"]),
        vcf_line(200, ["0/0", "0/0", "0/0", "0/1", "1/1"]),
        vcf_line(300, ["0.1", "1.7", "2.0", ".", "0"], fmt="DS"),
        vcf_line(400, ["1", "2", "3", "4", "5"], fmt="AD"),
        vcf_line(100, ["0/1", "0/0", "0/0", "0/0", "0/0"], chrom="2", info="AF=0.01"),
    ]
    return write_indexed_vcf(tmp_path, samples, lines)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Create temporary output directory for test results."""
    out = tmp_path / "output"
    out.mkdir()
    return out
