"""Tests for region parsing and the tabix region reader."""

from pathlib import Path

import pytest

from genoscan.io.vcf import Region, TabixRegionReader, find_index


@pytest.mark.tier0
class TestRegion:
    """Tests for Region.parse."""

    @pytest.mark.parametrize(
        ("descriptor", "expected"),
        [
            ("chr1", Region("chr1")),
            ("1:100", Region("1", 100)),
            ("1:100-2000", Region("1", 100, 2000)),
            ("1:1,000-2,000", Region("1", 1000, 2000)),
        ],
    )
    def test_parse(self, descriptor, expected):
        assert Region.parse(descriptor) == expected

    @pytest.mark.parametrize("descriptor", ["1:100-2000", "chrX", "2:5"])
    def test_str_round_trip(self, descriptor):
        assert str(Region.parse(descriptor)) == descriptor

    @pytest.mark.parametrize("descriptor", ["", "1:a-b", "1:0-10", "1:200-100"])
    def test_invalid(self, descriptor):
        with pytest.raises(ValueError):
            Region.parse(descriptor)


@pytest.mark.tier1
class TestTabixRegionReader:
    """Tests for TabixRegionReader on pysam-built fixtures."""

    def test_header_and_lines(self, small_vcf: Path, cohort):
        with TabixRegionReader(small_vcf, Region.parse("1:100-200")) as reader:
            header = reader.header_columns()
            lines = list(reader.lines())

        assert header[0] == "#CHROM"
        assert header[9:] == [*cohort, "EXTRA"]
        assert [line.split("\t")[1] for line in lines] == ["100", "200"]

    def test_handle_released_on_error(self, small_vcf: Path):
        reader = TabixRegionReader(small_vcf, Region.parse("1"))
        with pytest.raises(RuntimeError, match="boom"):
            with reader:
                raise RuntimeError("boom")
        assert reader._tabix is None

    def test_use_outside_with_block(self, small_vcf: Path):
        reader = TabixRegionReader(small_vcf, Region.parse("1"))
        with pytest.raises(RuntimeError, match="outside of a with block"):
            reader.header_columns()

    def test_find_index(self, small_vcf: Path):
        assert find_index(small_vcf) == Path(f"{small_vcf}.tbi")

    def test_missing_vcf(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="VCF file not found"):
            find_index(tmp_path / "none.vcf.gz")
