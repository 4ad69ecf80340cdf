"""
Bin Index: hierarchical genomic binning for transcript lookup.

Uses the extended UCSC binning scheme:
- Level 0 bins span 16kb (2^14), each coarser level is 8x wider (2^3).
- Seven levels address coordinates up to 2^32.
- Every level has a fixed offset into one shared bin-id space.

A transcript is registered once, in the smallest bin that holds its whole
span. A query walks every level, touching only the bins around the query
position, so retrieval cost depends on the number of bins, not the number
of transcripts.
"""

import logging
from collections import defaultdict
from collections.abc import Iterator

logger = logging.getLogger(__name__)

__all__ = ["BIN_FIRST_SHIFT", "BIN_NEXT_SHIFT", "BIN_LEVELS", "BIN_OFFSETS", "BinIndex", "get_bin", "query_bins"]

BIN_FIRST_SHIFT = 14
BIN_NEXT_SHIFT = 3
BIN_OFFSETS = (
    32768 + 4096 + 512 + 64 + 8 + 1,
    4096 + 512 + 64 + 8 + 1,
    512 + 64 + 8 + 1,
    64 + 8 + 1,
    8 + 1,
    1,
    0,
)
BIN_LEVELS = len(BIN_OFFSETS)
MAX_POSITION = 1 << (BIN_FIRST_SHIFT + BIN_NEXT_SHIFT * (BIN_LEVELS - 1))


def get_bin(start: int, end: int) -> int:
    """
    Return the smallest bin containing the 0-based half-open interval [start, end).

    Args:
        start: 0-based start (inclusive)
        end: 0-based end (exclusive)

    Raises:
        ValueError: if the interval is empty or beyond the addressable range.
    """
    if start < 0 or end <= start:
        raise ValueError(f"Invalid interval for binning: [{start}, {end})")
    if end > MAX_POSITION:
        raise ValueError(f"Interval [{start}, {end}) out of range (max is {MAX_POSITION})")

    start_bin = start >> BIN_FIRST_SHIFT
    end_bin = (end - 1) >> BIN_FIRST_SHIFT
    for offset in BIN_OFFSETS:
        if start_bin == end_bin:
            return offset + start_bin
        start_bin >>= BIN_NEXT_SHIFT
        end_bin >>= BIN_NEXT_SHIFT

    # Unreachable once the range check above passed
    raise ValueError(f"Interval [{start}, {end}) could not be binned")


def query_bins(position: int, slop: int = 0) -> Iterator[int]:
    """
    Yield every bin that can hold a feature within ``slop`` of a 0-based position.

    Bins are yielded level by level, finest first.
    """
    start_bin = max(position - slop, 0) >> BIN_FIRST_SHIFT
    end_bin = (position + slop) >> BIN_FIRST_SHIFT
    for offset in BIN_OFFSETS:
        yield from range(start_bin + offset, end_bin + offset + 1)
        start_bin >>= BIN_NEXT_SHIFT
        end_bin >>= BIN_NEXT_SHIFT


class BinIndex:
    """
    Maps (chromosome, bin id) to the transcript ids registered in that bin.

    Built once by a transcript provider, then frozen and only read while
    annotating.
    """

    def __init__(self):
        self._bins: dict[str, dict[int, list[str]]] = defaultdict(lambda: defaultdict(list))
        self._frozen = False

    def add(self, chrom: str, start: int, end: int, transcript_id: str) -> int:
        """
        Register a transcript spanning the 0-based half-open interval [start, end).

        Returns:
            The bin id the transcript was placed in.
        """
        if self._frozen:
            raise RuntimeError("BinIndex is frozen and cannot be modified")
        bin_id = get_bin(start, end)
        self._bins[chrom][bin_id].append(transcript_id)
        return bin_id

    def freeze(self) -> "BinIndex":
        """Make the index read-only."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def transcripts_in_bin(self, chrom: str, bin_id: int) -> list[str]:
        """Transcript ids registered at exactly this bin."""
        chrom_bins = self._bins.get(chrom)
        if chrom_bins is None:
            return []
        return list(chrom_bins.get(bin_id, ()))

    def query(self, chrom: str, position: int, slop: int = 0) -> list[str]:
        """
        Collect candidate transcripts for a 0-based position.

        Bins within ``slop`` bases either side of ``position`` are searched so
        transcripts ending just short of the variant are still returned.

        Returns:
            Transcript ids in discovery order, finest level first. The same id
            can appear more than once; callers dedupe.
        """
        candidates: list[str] = []
        for bin_id in query_bins(position, slop):
            candidates.extend(self.transcripts_in_bin(chrom, bin_id))
        return candidates

    def __len__(self) -> int:
        return sum(len(ids) for chrom_bins in self._bins.values() for ids in chrom_bins.values())

    def __contains__(self, chrom: str) -> bool:
        return chrom in self._bins
