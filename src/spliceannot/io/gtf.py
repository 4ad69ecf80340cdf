"""
GTF Transcript Provider: exon models and bin index loaded from a GTF file.

Only ``exon`` features are read. Exons are grouped by their ``transcript_id``
attribute and each transcript is placed in the bin index by its full span
(first exon start to last exon end).

Example:
    >>> table = TranscriptTable.from_gtf("annotations.gtf")
    >>> table.exons_for_transcript("ENST00000456328")
"""

import gzip
import logging
from collections import defaultdict
from collections.abc import Iterator
from pathlib import Path
from typing import NamedTuple

from ..core.annotator import TranscriptProvider
from ..core.binning import BinIndex
from ..errors import GtfFormatError, MissingExonsError, UnsortedExonsError
from ..models.core import GenomicInterval

logger = logging.getLogger(__name__)

__all__ = ["GtfExon", "GtfReader", "TranscriptTable", "parse_attributes"]

# GTF column indices
COL_SEQNAME = 0
COL_FEATURE = 2
COL_START = 3
COL_END = 4
COL_STRAND = 6
COL_ATTRIBUTES = 8

FEATURE_EXON = "exon"


class GtfExon(NamedTuple):
    """One exon line of a GTF file."""

    transcript_id: str
    gene_id: str
    interval: GenomicInterval


def parse_attributes(attr_string: str) -> dict[str, str]:
    """
    Parse a GTF attribute column into a dictionary.

    Args:
        attr_string: Semicolon-separated ``key "value"`` pairs.

    Returns:
        Attribute values with surrounding quotes removed. Repeated keys keep
        the first value.
    """
    attributes: dict[str, str] = {}
    if not attr_string or attr_string == ".":
        return attributes

    for item in attr_string.split(";"):
        item = item.strip()
        if not item:
            continue
        key, _, value = item.partition(" ")
        attributes.setdefault(key, value.strip().strip('"'))

    return attributes


class GtfReader:
    """Streams exon records from a plain or gzipped GTF file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"GTF file not found: {self.path}")

    def _open(self):
        if self.path.suffix == ".gz":
            return gzip.open(self.path, "rt")
        return open(self.path)

    def __iter__(self) -> Iterator[GtfExon]:
        with self._open() as f:
            for line_number, line in enumerate(f, start=1):
                exon = self._parse_line(line, line_number)
                if exon is not None:
                    yield exon

    @staticmethod
    def _parse_line(line: str, line_number: int) -> GtfExon | None:
        line = line.rstrip("\n")
        if not line.strip() or line.startswith("#"):
            return None

        parts = line.split("\t")
        if len(parts) < 9:
            raise GtfFormatError(line_number, f"expected 9 columns, found {len(parts)}")
        if parts[COL_FEATURE] != FEATURE_EXON:
            return None

        attributes = parse_attributes(parts[COL_ATTRIBUTES])
        for key in ("transcript_id", "gene_id"):
            if not attributes.get(key):
                raise GtfFormatError(line_number, f"exon has no {key} attribute")

        try:
            interval = GenomicInterval(
                chrom=parts[COL_SEQNAME],
                start=int(parts[COL_START]),
                end=int(parts[COL_END]),
                strand=parts[COL_STRAND],
            )
        except ValueError as e:
            raise GtfFormatError(line_number, f"invalid exon coordinates: {e}") from e

        return GtfExon(attributes["transcript_id"], attributes["gene_id"], interval)


def _check_exons(transcript_id: str, exons: list[GenomicInterval]) -> None:
    """Exons must share chromosome and strand, ascend and never overlap."""
    first = exons[0]
    for previous, exon in zip(exons, exons[1:]):
        if exon.chrom != first.chrom:
            raise UnsortedExonsError(transcript_id, f"exons on {first.chrom} and {exon.chrom}")
        if exon.strand != first.strand:
            raise UnsortedExonsError(transcript_id, f"mixed strands {first.strand!r} and {exon.strand!r}")
        if exon.start <= previous.end:
            raise UnsortedExonsError(
                transcript_id,
                f"exon {exon.start}-{exon.end} overlaps or precedes {previous.start}-{previous.end}",
            )


class TranscriptTable(TranscriptProvider):
    """
    In-memory transcript models with a bin index over transcript spans.

    Populate with ``add_exon`` and finish with ``build``, or load a file with
    ``from_gtf``. After ``build`` the table is read-only.
    """

    def __init__(self):
        self._pending: dict[str, list[GenomicInterval]] = defaultdict(list)
        self._exons: dict[str, tuple[GenomicInterval, ...]] = {}
        self._genes: dict[str, str] = {}
        self._bin_index = BinIndex()
        self._built = False

    @classmethod
    def from_gtf(cls, path: Path | str) -> "TranscriptTable":
        """Load and index every transcript in a GTF file."""
        table = cls()
        n_exons = 0
        for exon in GtfReader(path):
            table.add_exon(exon.transcript_id, exon.gene_id, exon.interval)
            n_exons += 1
        table.build()
        logger.info("Loaded %d exons in %d transcripts from %s", n_exons, len(table), path)
        return table

    def add_exon(self, transcript_id: str, gene_id: str, exon: GenomicInterval) -> None:
        if self._built:
            raise RuntimeError("TranscriptTable is built and cannot be modified")
        self._pending[transcript_id].append(exon)
        self._genes.setdefault(transcript_id, gene_id)

    def build(self) -> "TranscriptTable":
        """Sort and check each transcript's exons, then index transcript spans."""
        for transcript_id, exons in self._pending.items():
            exons.sort(key=lambda e: (e.start, e.end))
            _check_exons(transcript_id, exons)
            self._exons[transcript_id] = tuple(exons)
            # GTF is 1-based inclusive, the index takes 0-based half-open
            self._bin_index.add(exons[0].chrom, exons[0].start - 1, exons[-1].end, transcript_id)
        self._pending.clear()
        self._bin_index.freeze()
        self._built = True
        return self

    @property
    def bin_index(self) -> BinIndex:
        return self._bin_index

    def exons_for_transcript(self, transcript_id: str) -> tuple[GenomicInterval, ...]:
        exons = self._exons.get(transcript_id)
        if not exons:
            raise MissingExonsError(transcript_id)
        return exons

    def gene_for_transcript(self, transcript_id: str) -> str:
        return self._genes[transcript_id]

    @property
    def transcript_ids(self) -> list[str]:
        return list(self._exons)

    def __len__(self) -> int:
        return len(self._exons)
