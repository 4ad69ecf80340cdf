"""
Splice-region classification of a point variant against one transcript.

Exon lists arrive sorted by ascending genomic coordinate. Each strand has its
own procedure that walks the exons in transcription order (ascending on '+',
descending on '-'), so "previous" and "next" exon always mean upstream and
downstream in the transcript.

All comparisons use ``variant.end``, the 1-based coordinate of the variant
base, against 1-based inclusive exon coordinates.

The threshold scan stops at the first exon lying beyond the intronic distance
of the variant in transcription order. That is only valid because exons are
sorted and non-overlapping, which the transcript provider checks when it
hands out an exon list.
"""

import logging
from collections.abc import Sequence

from ..errors import UnknownStrandError
from ..models.core import ClassificationResult, GenomicInterval, SpliceAnnotation, Strand, Variant

logger = logging.getLogger(__name__)

__all__ = ["SpliceRegionClassifier", "set_cis_effect_limits"]


def _set_cis_effect_limits_positive(
    exons: Sequence[GenomicInterval], result: ClassificationResult, i: int
) -> None:
    previous_exon = exons[i - 1] if i != 0 else exons[0]
    if previous_exon.start < result.cis_effect_start:
        result.cis_effect_start = previous_exon.start

    next_exon = exons[i + 1] if i != len(exons) - 1 else exons[-1]
    if next_exon.end > result.cis_effect_end:
        result.cis_effect_end = next_exon.end


def _set_cis_effect_limits_negative(
    exons: Sequence[GenomicInterval], result: ClassificationResult, i: int
) -> None:
    previous_exon = exons[i - 1] if i != 0 else exons[0]
    if previous_exon.end > result.cis_effect_end:
        result.cis_effect_end = previous_exon.end

    next_exon = exons[i + 1] if i != len(exons) - 1 else exons[-1]
    if next_exon.start < result.cis_effect_start:
        result.cis_effect_start = next_exon.start


def set_cis_effect_limits(
    exons: Sequence[GenomicInterval], result: ClassificationResult, i: int
) -> None:
    """
    Widen the cis-effect window of ``result`` around exon ``i``.

    The window reaches the far boundaries of the neighbouring exons, which is
    where the nearest donor and acceptor of the flanking junctions sit.
    Downstream junction searches use it to pick junctions a variant could
    affect. Bounds only ever widen, so repeated calls accumulate the widest
    window seen.

    Args:
        exons: Exon list in transcription order.
        result: Result to update in place.
        i: Index of the matched exon in ``exons``.
    """
    strand = exons[0].strand
    if strand == Strand.POSITIVE.value:
        _set_cis_effect_limits_positive(exons, result, i)
    elif strand == Strand.NEGATIVE.value:
        _set_cis_effect_limits_negative(exons, result, i)
    else:
        raise UnknownStrandError(strand)


class SpliceRegionClassifier:
    """
    Decides whether a variant lies in the splice region of a transcript.

    Args:
        exonic_distance: Max distance from an exon boundary, inside the exon,
            to call ``splicing_exonic``.
        intronic_distance: Max distance from an exon boundary, inside the
            intron, to call ``splicing_intronic``.
        force_exonic: Label any exonic position ``exonic``.
        force_intronic: Label any intronic position ``intronic``.
    """

    def __init__(
        self,
        exonic_distance: int = 3,
        intronic_distance: int = 2,
        force_exonic: bool = False,
        force_intronic: bool = False,
    ):
        self.exonic_distance = exonic_distance
        self.intronic_distance = intronic_distance
        self.force_exonic = force_exonic
        self.force_intronic = force_intronic

    def classify(
        self,
        exons: Sequence[GenomicInterval],
        variant: Variant,
        transcript_id: str | None = None,
    ) -> ClassificationResult:
        """
        Classify ``variant`` against an exon list sorted by ascending coordinate.

        Raises:
            UnknownStrandError: if the transcript strand is not '+' or '-'.
        """
        strand = exons[0].strand
        if strand == Strand.POSITIVE.value:
            return self._classify_positive(exons, variant)
        if strand == Strand.NEGATIVE.value:
            return self._classify_negative(list(reversed(exons)), variant)
        raise UnknownStrandError(strand, transcript_id)

    @staticmethod
    def _distance_to_boundaries(exon: GenomicInterval, position: int) -> int:
        return min(position - exon.start, exon.end - position)

    def _classify_positive(
        self, exons: Sequence[GenomicInterval], variant: Variant
    ) -> ClassificationResult:
        result = ClassificationResult.for_variant(variant)
        v = variant.end
        last = len(exons) - 1

        # Outside the transcript span
        if exons[0].start > v or exons[last].end < v:
            return result

        for i, exon in enumerate(exons):
            in_exon = exon.start <= v <= exon.end

            if self.force_exonic and in_exon:
                result.score = self._distance_to_boundaries(exon, v)
                result.annotation = SpliceAnnotation.EXONIC
                return result

            if self.force_intronic and i != last and exon.end < v < exons[i + 1].start:
                result.score = min(v - exon.end, exons[i + 1].start - v)
                result.annotation = SpliceAnnotation.INTRONIC
                return result

            # This and every later exon start beyond the splice region
            if exon.start - self.intronic_distance > v:
                return result

            # Exonic, near the acceptor side
            if i != 0 and in_exon and v <= exon.start + self.exonic_distance:
                result.score = self._distance_to_boundaries(exon, v)
                result.annotation = SpliceAnnotation.SPLICING_EXONIC
                set_cis_effect_limits(exons, result, i)
                return result

            # Intronic, upstream of this exon and not inside the previous one
            if (
                i != 0
                and exons[i - 1].end < v < exon.start
                and v >= exon.start - self.intronic_distance
            ):
                result.score = min(v - exons[i - 1].end, exon.start - v)
                result.annotation = SpliceAnnotation.SPLICING_INTRONIC
                set_cis_effect_limits(exons, result, i)
                return result

            # Exonic, near the donor side
            if i != last and in_exon and v >= exon.end - self.exonic_distance:
                result.score = self._distance_to_boundaries(exon, v)
                result.annotation = SpliceAnnotation.SPLICING_EXONIC
                set_cis_effect_limits(exons, result, i)
                return result

            # Intronic, downstream of this exon and not inside the next one
            if (
                i != last
                and exon.end < v < exons[i + 1].start
                and v <= exon.end + self.intronic_distance
            ):
                result.score = min(v - exon.end, exons[i + 1].start - v)
                result.annotation = SpliceAnnotation.SPLICING_INTRONIC
                set_cis_effect_limits(exons, result, i)
                return result

        return result

    def _classify_negative(
        self, exons: Sequence[GenomicInterval], variant: Variant
    ) -> ClassificationResult:
        # exons are in transcription order here: descending coordinates
        result = ClassificationResult.for_variant(variant)
        v = variant.end
        last = len(exons) - 1

        # Outside the transcript span
        if exons[last].start > v or exons[0].end < v:
            return result

        for i, exon in enumerate(exons):
            in_exon = exon.start <= v <= exon.end

            if self.force_exonic and in_exon:
                result.score = self._distance_to_boundaries(exon, v)
                result.annotation = SpliceAnnotation.EXONIC
                return result

            if self.force_intronic and i != last and exons[i + 1].end < v < exon.start:
                result.score = min(v - exons[i + 1].end, exon.start - v)
                result.annotation = SpliceAnnotation.INTRONIC
                return result

            # This and every later exon end before the splice region
            if exon.end + self.intronic_distance < v:
                return result

            # Exonic, near the donor side
            if i != last and in_exon and v <= exon.start + self.exonic_distance:
                result.score = self._distance_to_boundaries(exon, v)
                result.annotation = SpliceAnnotation.SPLICING_EXONIC
                set_cis_effect_limits(exons, result, i)
                return result

            # Intronic, downstream of this exon and not inside the next one
            if (
                i != last
                and exons[i + 1].end < v < exon.start
                and v >= exon.start - self.intronic_distance
            ):
                result.score = min(v - exons[i + 1].end, exon.start - v)
                result.annotation = SpliceAnnotation.SPLICING_INTRONIC
                set_cis_effect_limits(exons, result, i)
                return result

            # Exonic, near the acceptor side
            if i != 0 and in_exon and v >= exon.end - self.exonic_distance:
                result.score = self._distance_to_boundaries(exon, v)
                result.annotation = SpliceAnnotation.SPLICING_EXONIC
                set_cis_effect_limits(exons, result, i)
                return result

            # Intronic, upstream of this exon and not inside the previous one
            if (
                i != 0
                and exon.end < v < exons[i - 1].start
                and v <= exon.end + self.intronic_distance
            ):
                result.score = min(v - exon.end, exons[i - 1].start - v)
                result.annotation = SpliceAnnotation.SPLICING_INTRONIC
                set_cis_effect_limits(exons, result, i)
                return result

        return result
