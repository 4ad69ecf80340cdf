"""
Output Writers: writing annotated variant records.

The writer declares four INFO fields and fills them on every record it writes.
"""

import pysam

from ..errors import UndeclaredContigError
from ..models.core import AnnotatedVariant

__all__ = ["ANNOTATION_INFO_FIELDS", "OutputWriter", "VcfWriter"]

ANNOTATION_INFO_FIELDS = {
    "genes": "The Variant falls in the splice region of these genes",
    "transcripts": "The Variant falls in the splice region of these transcripts",
    "distances": "Vector of Min(Distance from start/end of exon in the transcript.)",
    "annotations": "Does the variant fall in exonic/intronic splicing related space in the transcript.",
}


class OutputWriter:
    """Abstract base class for annotated record sinks."""

    def write(self, record: pysam.VariantRecord, annotated: AnnotatedVariant):
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _write_mode(path: str) -> str:
    if path.endswith(".bcf"):
        return "wb"
    if path.endswith(".gz"):
        return "wz"
    return "w"


class VcfWriter(OutputWriter):
    """
    Writes annotated records to a VCF/BCF file, or stdout when path is "-".

    The annotation INFO definitions are added to ``header`` in place. Pass the
    header of the file the records are read from, so the records themselves
    accept the new fields.
    """

    def __init__(self, path: str, header: pysam.VariantHeader):
        self.path = path
        for field_id, description in ANNOTATION_INFO_FIELDS.items():
            if field_id not in header.info:
                header.info.add(field_id, 1, "String", description)
        self._vcf = pysam.VariantFile(path, _write_mode(path), header=header)

    def write(self, record: pysam.VariantRecord, annotated: AnnotatedVariant):
        # The output header is fixed once opened; contigs htslib adds while
        # reading undeclared records never reach it
        if record.chrom not in self._vcf.header.contigs:
            raise UndeclaredContigError(record.chrom)
        for field_id, value in annotated.info_fields.items():
            record.info[field_id] = value
        self._vcf.write(record)

    def close(self):
        self._vcf.close()
