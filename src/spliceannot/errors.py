"""Fatal errors raised while annotating variants.

Every error here aborts the run; a variant that simply is not near a splice
junction is reported as ``non_splice_region``, never raised.
"""


class SpliceAnnotError(Exception):
    """Base class for spliceannot errors."""


class UnknownStrandError(SpliceAnnotError):
    """Raised when a transcript carries a strand other than '+' or '-'."""

    def __init__(self, strand: str, transcript_id: str | None = None):
        message = f"Unknown strand {strand!r}"
        if transcript_id:
            message += f" for transcript [{transcript_id}]"
        super().__init__(message)
        self.strand = strand


class MissingExonsError(SpliceAnnotError):
    """Raised when the bin index returns a transcript with no exons."""

    def __init__(self, transcript_id: str):
        super().__init__(
            f"No exons for transcript [{transcript_id}]. "
            "The bin index and exon table are out of sync"
        )
        self.transcript_id = transcript_id


class UnsortedExonsError(SpliceAnnotError):
    """Raised when an exon list is unsorted, overlapping or mixes strands."""

    def __init__(self, transcript_id: str, reason: str):
        super().__init__(f"Invalid exon list for transcript [{transcript_id}]: {reason}")
        self.transcript_id = transcript_id


class GtfFormatError(SpliceAnnotError):
    """Raised when a GTF line cannot be parsed."""

    def __init__(self, line_number: int, reason: str):
        super().__init__(f"GTF line {line_number}: {reason}")
        self.line_number = line_number


class UndeclaredContigError(SpliceAnnotError):
    """Raised when a record's chromosome has no ##contig line in the output header."""

    def __init__(self, chrom: str):
        super().__init__(
            f"Chromosome {chrom!r} is not declared in the VCF header. "
            "Add a ##contig line for it to the input file"
        )
        self.chrom = chrom
