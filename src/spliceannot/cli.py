"""
CLI Entry Point: Exposes the spliceannot functionality via command line.
"""

from pathlib import Path

import typer

from . import __version__
from .models.core import AnnotatorConfig
from .pipeline import Pipeline
from .utils.logging import console, setup_logging

app = typer.Typer(help="spliceannot: annotate variants in splice regions of transcripts")


@app.callback()
def main():
    """
    spliceannot: annotate variants in splice regions of transcripts
    """
    pass


@app.command()
def version():
    """Show the installed version."""
    typer.echo(f"spliceannot {__version__}")


@app.command()
def annotate(
    variant_file: Path = typer.Argument(..., help="VCF/BCF file of variants to annotate"),
    gtf_file: Path = typer.Argument(..., help="GTF file with exon annotations"),
    exonic_distance: int = typer.Option(
        3,
        "--exonic-distance",
        "-e",
        help="Maximum distance from the start/end of an exon to annotate a variant "
        "in exonic space as relevant to splicing",
    ),
    intronic_distance: int = typer.Option(
        2,
        "--intronic-distance",
        "-i",
        help="Maximum distance from the start/end of an exon to annotate a variant "
        "in intronic space as relevant to splicing",
    ),
    all_exonic: bool = typer.Option(
        False, "--all-exonic", "-E", help="Annotate every variant in exonic space within a transcript"
    ),
    all_intronic: bool = typer.Option(
        False,
        "--all-intronic",
        "-I",
        help="Annotate every variant in intronic space within a transcript",
    ),
    output: str = typer.Option("-", "--output", "-o", help="File to write output to [stdout]"),
    keep_single_exon: bool = typer.Option(
        False, "--keep-single-exon", "-S", help="Don't skip single exon transcripts"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """
    Annotate variants that fall in the splice region of a transcript.

    Adds the INFO fields genes, transcripts, distances and annotations to every record.
    """
    setup_logging(verbose=verbose, log_file=str(log_file) if log_file else None)

    try:
        config = AnnotatorConfig(
            variant_file=variant_file,
            gtf_file=gtf_file,
            output=output,
            exonic_distance=exonic_distance,
            intronic_distance=intronic_distance,
            force_exonic=all_exonic,
            force_intronic=all_intronic,
            skip_single_exon_transcripts=not keep_single_exon,
        )

        pipeline = Pipeline(config)
        pipeline.run()

    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
