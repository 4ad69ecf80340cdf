"""
Data models for spliceannot.

Provides Pydantic models for variants, exons, classification results and configuration.
"""

from .core import (
    NA,
    AnnotatedVariant,
    AnnotatorConfig,
    ClassificationResult,
    GenomicInterval,
    SpliceAnnotation,
    Strand,
    Variant,
)

__all__ = [
    "NA",
    "AnnotatedVariant",
    "AnnotatorConfig",
    "ClassificationResult",
    "GenomicInterval",
    "SpliceAnnotation",
    "Strand",
    "Variant",
]
