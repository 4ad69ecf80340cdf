"""
Per-variant annotation: bin query, classification and aggregation.

The transcript provider and its bin index are built once before the record
loop and only read here, so one VariantAnnotator can serve a whole run.
"""

import logging
from collections.abc import Sequence

from ..errors import MissingExonsError
from ..models.core import AnnotatedVariant, GenomicInterval, Variant
from .aggregator import fold
from .binning import BinIndex, query_bins
from .classifier import SpliceRegionClassifier

logger = logging.getLogger(__name__)

__all__ = ["TranscriptProvider", "VariantAnnotator"]


class TranscriptProvider:
    """
    Abstract source of transcript models.

    The annotator walks the bins around a variant and asks
    ``transcripts_in_bin`` for each one; the default reads ``bin_index``.
    """

    @property
    def bin_index(self) -> BinIndex:
        raise NotImplementedError

    def transcripts_in_bin(self, chrom: str, bin_id: int) -> list[str]:
        return self.bin_index.transcripts_in_bin(chrom, bin_id)

    def exons_for_transcript(self, transcript_id: str) -> Sequence[GenomicInterval]:
        """Exons sorted by ascending coordinate; raises MissingExonsError when empty."""
        raise NotImplementedError

    def gene_for_transcript(self, transcript_id: str) -> str:
        raise NotImplementedError


class VariantAnnotator:
    """
    Annotates variants against every transcript near them.

    Args:
        provider: Transcript models and their bin index.
        exonic_distance: See SpliceRegionClassifier.
        intronic_distance: See SpliceRegionClassifier; also the bin query slop.
        force_exonic: See SpliceRegionClassifier.
        force_intronic: See SpliceRegionClassifier.
        skip_single_exon_transcripts: Ignore transcripts with exactly one exon.
    """

    def __init__(
        self,
        provider: TranscriptProvider,
        exonic_distance: int = 3,
        intronic_distance: int = 2,
        force_exonic: bool = False,
        force_intronic: bool = False,
        skip_single_exon_transcripts: bool = True,
    ):
        self.provider = provider
        self.classifier = SpliceRegionClassifier(
            exonic_distance=exonic_distance,
            intronic_distance=intronic_distance,
            force_exonic=force_exonic,
            force_intronic=force_intronic,
        )
        self.skip_single_exon_transcripts = skip_single_exon_transcripts

    def candidate_transcripts(self, variant: Variant) -> list[str]:
        """Transcripts within splicing range of the variant, deduplicated in discovery order."""
        hits: list[str] = []
        for bin_id in query_bins(variant.pos, self.classifier.intronic_distance):
            hits.extend(self.provider.transcripts_in_bin(variant.chrom, bin_id))
        return list(dict.fromkeys(hits))

    def annotate(self, variant: Variant) -> AnnotatedVariant:
        """Classify the variant against each candidate transcript and fold the hits."""
        annotated = AnnotatedVariant.for_variant(variant)

        for transcript_id in self.candidate_transcripts(variant):
            exons = self.provider.exons_for_transcript(transcript_id)
            if not exons:
                raise MissingExonsError(transcript_id)
            if self.skip_single_exon_transcripts and len(exons) == 1:
                continue

            result = self.classifier.classify(exons, variant, transcript_id)
            if not result.is_splice_region:
                continue

            gene_id = self.provider.gene_for_transcript(transcript_id)
            logger.debug(
                "%s:%d %s in %s (%s), distance %d",
                variant.chrom,
                variant.end,
                result.annotation.value,
                transcript_id,
                gene_id,
                result.score,
            )
            fold(annotated, gene_id, transcript_id, result)

        return annotated
