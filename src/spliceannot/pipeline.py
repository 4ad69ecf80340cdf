"""
Pipeline Orchestrator: Manages the execution flow of spliceannot.

This module handles:
1. Loading transcript models and their bin index from the GTF.
2. Opening the input variants and the output destination.
3. Annotating each record, in arrival order, against nearby transcripts.
4. Writing every record with its splice-region annotations.

Any fatal error aborts the run; no record is skipped.
"""

import logging

from .core.annotator import VariantAnnotator
from .io.gtf import TranscriptTable
from .io.input import VcfReader
from .io.output import VcfWriter
from .models.core import NA, AnnotatorConfig
from .utils.logging import console, timed

logger = logging.getLogger(__name__)


class Pipeline:
    def __init__(self, config: AnnotatorConfig):
        self.config = config

    def _log_parameters(self):
        config = self.config
        logger.info("Variant file: %s", config.variant_file)
        logger.info("GTF file: %s", config.gtf_file)
        logger.info("Output: %s", "stdout" if config.output == "-" else config.output)
        if not config.force_intronic:
            logger.info("Intronic min distance: %d", config.intronic_distance)
        if not config.force_exonic:
            logger.info("Exonic min distance: %d", config.exonic_distance)
        if not config.skip_single_exon_transcripts:
            logger.info("Not skipping single exon transcripts.")

    def run(self) -> int:
        """
        Execute the pipeline.

        Returns:
            Number of records written.
        """
        self._log_parameters()

        with console.status("[bold green]Loading transcripts...[/bold green]"):
            with timed("Loading GTF", logger):
                table = TranscriptTable.from_gtf(self.config.gtf_file)

        annotator = VariantAnnotator(
            table,
            exonic_distance=self.config.exonic_distance,
            intronic_distance=self.config.intronic_distance,
            force_exonic=self.config.force_exonic,
            force_intronic=self.config.force_intronic,
            skip_single_exon_transcripts=self.config.skip_single_exon_transcripts,
        )

        n_records = 0
        n_splice = 0
        with timed("Annotating variants", logger):
            with VcfReader(self.config.variant_file) as reader, VcfWriter(
                self.config.output, reader.header
            ) as writer:
                for variant, record in reader:
                    annotated = annotator.annotate(variant)
                    writer.write(record, annotated)
                    n_records += 1
                    if annotated.transcripts != NA:
                        n_splice += 1

        logger.info(
            "Annotated %d variants, %d in a splice region", n_records, n_splice
        )
        return n_records
