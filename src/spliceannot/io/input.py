"""
Input Adapters: reading variant records.

Records are read with pysam and paired with the internal Variant model, so the
original record can be written back out with its annotations attached.
"""

from collections.abc import Iterator
from pathlib import Path

import pysam

from ..models.core import Variant

__all__ = ["VariantReader", "VcfReader"]


class VariantReader:
    """Abstract base class for variant record sources."""

    def __iter__(self) -> Iterator[tuple[Variant, pysam.VariantRecord]]:
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args) -> None:
        self.close()


class VcfReader(VariantReader):
    """Reads variants from a VCF or BCF file, plain or bgzipped."""

    def __init__(self, path: Path | str):
        self.path = path
        self._vcf = pysam.VariantFile(str(path))

    @property
    def header(self) -> pysam.VariantHeader:
        return self._vcf.header

    @staticmethod
    def to_variant(record: pysam.VariantRecord) -> Variant:
        # pysam exposes the 1-based VCF POS as record.pos and the 0-based one as record.start
        return Variant(chrom=record.chrom, pos=record.start)

    def __iter__(self) -> Iterator[tuple[Variant, pysam.VariantRecord]]:
        for record in self._vcf:
            yield self.to_variant(record), record

    def close(self):
        self._vcf.close()
