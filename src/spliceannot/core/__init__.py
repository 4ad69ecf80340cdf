"""
Core module for spliceannot.

Provides the bin index, the splice-region classifier, the aggregator and the
per-variant annotator.
"""

from .aggregator import fold
from .annotator import TranscriptProvider, VariantAnnotator
from .binning import BinIndex, get_bin
from .classifier import SpliceRegionClassifier, set_cis_effect_limits

__all__ = [
    "BinIndex",
    "SpliceRegionClassifier",
    "TranscriptProvider",
    "VariantAnnotator",
    "fold",
    "get_bin",
    "set_cis_effect_limits",
]
