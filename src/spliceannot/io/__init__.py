"""
I/O module for spliceannot.

Provides the VCF record source and sink and the GTF transcript provider.
"""

from .gtf import GtfReader, TranscriptTable
from .input import VariantReader, VcfReader
from .output import ANNOTATION_INFO_FIELDS, OutputWriter, VcfWriter

__all__ = [
    "ANNOTATION_INFO_FIELDS",
    "GtfReader",
    "OutputWriter",
    "TranscriptTable",
    "VariantReader",
    "VcfReader",
    "VcfWriter",
]
