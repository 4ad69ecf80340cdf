"""Folding per-transcript classification results into one record per variant."""

from ..models.core import NA, AnnotatedVariant, ClassificationResult

__all__ = ["fold"]


def _append(current: str, value: str) -> str:
    return value if current == NA else f"{current},{value}"


def fold(
    annotated: AnnotatedVariant,
    gene_id: str,
    transcript_id: str,
    result: ClassificationResult,
) -> AnnotatedVariant:
    """
    Add one splice-region result to the variant's aggregate.

    Transcripts, distances and annotations get one entry per call, in call
    order. A gene is only appended the first time it is seen for this variant.
    The cis-effect window keeps the widest bounds seen so far.

    Args:
        annotated: Aggregate to update in place.
        gene_id: Gene of the matching transcript.
        transcript_id: Matching transcript.
        result: Its classification, not ``non_splice_region``.

    Returns:
        The updated aggregate.
    """
    if annotated.transcripts == NA:
        annotated.genes = gene_id
        annotated.transcripts = transcript_id
        annotated.distances = str(result.score)
        annotated.annotations = result.annotation.value
        annotated.add_gene(gene_id)
    else:
        if annotated.add_gene(gene_id):
            annotated.genes = _append(annotated.genes, gene_id)
        annotated.transcripts = _append(annotated.transcripts, transcript_id)
        annotated.distances = _append(annotated.distances, str(result.score))
        annotated.annotations = _append(annotated.annotations, result.annotation.value)

    annotated.cis_effect_start = min(annotated.cis_effect_start, result.cis_effect_start)
    annotated.cis_effect_end = max(annotated.cis_effect_end, result.cis_effect_end)
    return annotated
