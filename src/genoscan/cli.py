"""genoscan command-line interface.

This module provides a Typer-based CLI for scanning one region of an indexed
VCF against an analysis cohort, with global -outdir, -o and -v flags for the
run log.
"""

import sys
from pathlib import Path
from typing import Annotated

import typer

import genoscan
from genoscan.core import OutputConfig
from genoscan.pipeline import PipelineConfig, PipelineRunner
from genoscan.utils import setup_logging, write_run_log

app = typer.Typer(
    name="genoscan",
    help="genoscan: region-bounded genotype reading and variant filtering.",
    add_completion=False,
)

# Store global options set by callback
_global_config: OutputConfig | None = None


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"genoscan version {genoscan.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    outdir: Annotated[
        Path,
        typer.Option("-outdir", help="Output directory"),
    ] = Path("output"),
    output: Annotated[
        str,
        typer.Option("-o", help="Output file prefix"),
    ] = "result",
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Verbose output"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """genoscan: read and filter the genotypes of one genomic region."""
    global _global_config
    _global_config = OutputConfig(outdir=outdir, prefix=output, verbose=verbose)
    setup_logging(verbose=verbose)


@app.command("scan")
def scan_command(
    vcf: Annotated[
        Path,
        typer.Option("--vcf", help="bgzip-compressed, tabix-indexed VCF"),
    ],
    region: Annotated[
        str,
        typer.Option("--region", help="Region to scan (chr, chr:start-end)"),
    ],
    samples: Annotated[
        Path,
        typer.Option("--samples", help="Ordered cohort sample IDs, one per line"),
    ],
    include_samples: Annotated[
        Path | None,
        typer.Option("--include-samples", help="Samples to keep"),
    ] = None,
    exclude_samples: Annotated[
        Path | None,
        typer.Option("--exclude-samples", help="Samples to drop"),
    ] = None,
    include_sites: Annotated[
        Path | None,
        typer.Option("--include-sites", help="Variant IDs to keep"),
    ] = None,
    exclude_sites: Annotated[
        Path | None,
        typer.Option("--exclude-sites", help="Variant IDs to drop"),
    ] = None,
    maf_threshold: Annotated[
        float,
        typer.Option("--maf-threshold", help="Minimum minor allele frequency"),
    ] = 0.0,
    ma_sample_threshold: Annotated[
        int,
        typer.Option(
            "--ma-sample-threshold",
            help="Minimum number of samples carrying the minor allele",
        ),
    ] = 0,
    global_af_threshold: Annotated[
        float,
        typer.Option(
            "--global-af-threshold",
            help="Drop sites with INFO AF < t or > 1-t (default: 0, disabled)",
        ),
    ] = 0.0,
    interaction: Annotated[
        Path | None,
        typer.Option("--interaction", help="Interaction covariate (ID, value)"),
    ] = None,
    interaction_maf_threshold: Annotated[
        float,
        typer.Option(
            "--interaction-maf-threshold",
            help="Minimum MAF in both covariate-median halves (default: 0, disabled)",
        ),
    ] = 0.0,
    progress: Annotated[
        bool,
        typer.Option("--progress/--no-progress", help="Show progress bar"),
    ] = True,
) -> None:
    """Scan one region of a VCF and report the variants passing all filters.

    Reconciles the VCF header with the cohort, converts GT or DS values to
    dosages and applies the allele frequency thresholds. Writes a run log
    with the scan counts.
    """
    global _global_config
    if _global_config is None:
        _global_config = OutputConfig()

    command_line = " ".join(sys.argv)

    config = PipelineConfig(
        vcf=vcf,
        region=region,
        samples_file=samples,
        include_samples=include_samples,
        exclude_samples=exclude_samples,
        include_sites=include_sites,
        exclude_sites=exclude_sites,
        interaction_file=interaction,
        maf_threshold=maf_threshold,
        ma_sample_threshold=ma_sample_threshold,
        global_af_threshold=global_af_threshold,
        interaction_maf_threshold=interaction_maf_threshold,
        show_progress=progress,
    )

    try:
        result = PipelineRunner(config).run()
    except (OSError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None

    summary = result.data.summary
    typer.echo(
        f"Kept {result.data.n_variants} of {summary.n_parsed} variants "
        f"for {result.data.n_samples} samples in region {result.region}"
    )

    params = {
        "vcf": str(vcf),
        "region": str(result.region),
        "samples_file": str(samples),
        "interaction_file": str(interaction) if interaction else None,
        "maf_threshold": maf_threshold,
        "ma_sample_threshold": ma_sample_threshold,
        "global_af_threshold": global_af_threshold,
        "interaction_maf_threshold": interaction_maf_threshold,
    }
    counts = {
        "n_samples_included": summary.n_samples_included,
        "n_samples_excluded": summary.n_samples_excluded,
        "n_samples_missing": summary.n_samples_missing,
        "n_parsed": summary.n_parsed,
        "n_included": summary.n_included,
    }
    counts.update(
        {f"n_{reason.value}": summary.rejected[reason] for reason in summary.rejected}
    )
    timing = {
        "total": result.timing["total_s"],
        "load": result.timing["load_s"],
        "scan": result.timing["scan_s"],
    }

    log_path = write_run_log(_global_config, params, counts, timing, command_line)
    typer.echo(f"Log written to {log_path}")


if __name__ == "__main__":
    app()
