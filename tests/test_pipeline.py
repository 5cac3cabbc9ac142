"""Tests for PipelineRunner service class."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from conftest import vcf_line, write_indexed_vcf

from genoscan.core.snp_filter import RejectReason
from genoscan.pipeline import PipelineConfig, PipelineRunner


@pytest.fixture
def cohort_file(tmp_path: Path, cohort) -> Path:
    path = tmp_path / "cohort.txt"
    path.write_text("\n".join(cohort) + "\n")
    return path


class TestPipelineConfig:
    """Tests for PipelineConfig defaults."""

    def test_defaults(self) -> None:
        config = PipelineConfig(vcf=Path("x.vcf.gz"), region="1", samples_file=Path("s"))
        assert config.include_samples is None
        assert config.interaction_file is None
        assert config.maf_threshold == 0.0
        assert config.ma_sample_threshold == 0
        assert config.global_af_threshold == 0.0
        assert config.interaction_maf_threshold == 0.0
        assert config.show_progress is True


@pytest.mark.tier1
class TestValidateInputs:
    """Tests for PipelineRunner.validate_inputs."""

    def test_missing_vcf(self, tmp_path: Path, cohort_file: Path) -> None:
        config = PipelineConfig(
            vcf=tmp_path / "none.vcf.gz", region="1", samples_file=cohort_file
        )
        with pytest.raises(FileNotFoundError, match="VCF file not found"):
            PipelineRunner(config).validate_inputs()

    def test_missing_list_file(self, small_vcf: Path, cohort_file: Path) -> None:
        config = PipelineConfig(
            vcf=small_vcf,
            region="1",
            samples_file=cohort_file,
            exclude_sites=Path("nonexistent.txt"),
        )
        with pytest.raises(FileNotFoundError, match="Exclude sites file not found"):
            PipelineRunner(config).validate_inputs()

    def test_invalid_region(self, small_vcf: Path, cohort_file: Path) -> None:
        config = PipelineConfig(vcf=small_vcf, region="1:x", samples_file=cohort_file)
        with pytest.raises(ValueError, match="Invalid region"):
            PipelineRunner(config).validate_inputs()

    def test_invalid_threshold(self, small_vcf: Path, cohort_file: Path) -> None:
        config = PipelineConfig(
            vcf=small_vcf, region="1", samples_file=cohort_file, maf_threshold=0.7
        )
        with pytest.raises(ValueError, match="maf_threshold must be"):
            PipelineRunner(config).validate_inputs()

    def test_stratified_requires_interaction_file(
        self, small_vcf: Path, cohort_file: Path
    ) -> None:
        config = PipelineConfig(
            vcf=small_vcf,
            region="1",
            samples_file=cohort_file,
            interaction_maf_threshold=0.1,
        )
        with pytest.raises(ValueError, match="requires an interaction file"):
            PipelineRunner(config).validate_inputs()


@pytest.mark.tier1
class TestPipelineRun:
    """End-to-end pipeline runs."""

    def test_run_with_lists(self, tmp_path: Path, small_vcf: Path, cohort_file: Path):
        exclude_sites = tmp_path / "exclude_sites.txt"
        exclude_sites.write_text("rs200\n")
        exclude_samples = tmp_path / "exclude_samples.txt"
        exclude_samples.write_text("EXTRA\n")

        config = PipelineConfig(
            vcf=small_vcf,
            region="1",
            samples_file=cohort_file,
            exclude_samples=exclude_samples,
            exclude_sites=exclude_sites,
            show_progress=False,
        )
        result = PipelineRunner(config).run()

        assert str(result.region) == "1"
        assert [r.pos for r in result.data.records] == [100, 300]
        summary = result.data.summary
        assert summary.rejected[RejectReason.EXCLUDED_VARIANT] == 1
        assert summary.n_samples_excluded == 1
        assert summary.n_samples_missing == 0
        assert set(result.timing) == {"load_s", "scan_s", "total_s"}

    def test_run_stratified(self, tmp_path: Path, cohort, cohort_file: Path):
        # lower half: S1, S2; upper half: S3, S4
        lines = [
            vcf_line(100, ["0/1", "0/0", "0/1", "0/0"]),
            vcf_line(200, ["0/0", "0/0", "0/1", "1/1"]),
        ]
        vcf = write_indexed_vcf(tmp_path, cohort, lines)
        interaction = tmp_path / "interaction.txt"
        interaction.write_text("S1 1\nS2 2\nS3 3\nS4 4\n")

        config = PipelineConfig(
            vcf=vcf,
            region="1",
            samples_file=cohort_file,
            interaction_file=interaction,
            interaction_maf_threshold=0.1,
            show_progress=False,
        )
        result = PipelineRunner(config).run()

        assert [r.pos for r in result.data.records] == [100]
        assert result.data.summary.rejected[RejectReason.THRESHOLD] == 1
        np.testing.assert_array_equal(result.data.records[0].dosages, [1, 0, 1, 0])
