"""
spliceannot - A tool for annotating variants that fall in splice regions.

This package provides a command-line interface and Python API for classifying
point variants against transcript models: whether a variant sits near an exon
boundary, on which side, how far away, and which genes and transcripts it
touches.

Example usage:
    $ spliceannot annotate variants.vcf annotations.gtf -o annotated.vcf
"""

__version__ = "0.1.0"

from .core.annotator import VariantAnnotator
from .core.classifier import SpliceRegionClassifier
from .io.gtf import TranscriptTable
from .models.core import (
    AnnotatedVariant,
    AnnotatorConfig,
    ClassificationResult,
    GenomicInterval,
    SpliceAnnotation,
    Variant,
)
from .pipeline import Pipeline

__all__ = [
    "__version__",
    "AnnotatedVariant",
    "AnnotatorConfig",
    "ClassificationResult",
    "GenomicInterval",
    "Pipeline",
    "SpliceAnnotation",
    "SpliceRegionClassifier",
    "TranscriptTable",
    "Variant",
    "VariantAnnotator",
]
