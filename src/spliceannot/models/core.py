"""
Core data models for spliceannot.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

NA = "NA"


class Strand(str, Enum):
    """Transcript strand."""
    POSITIVE = "+"
    NEGATIVE = "-"


class SpliceAnnotation(str, Enum):
    """Classification label for a variant against one transcript."""
    NON_SPLICE_REGION = "non_splice_region"
    EXONIC = "exonic"
    INTRONIC = "intronic"
    SPLICING_EXONIC = "splicing_exonic"
    SPLICING_INTRONIC = "splicing_intronic"


class GenomicInterval(BaseModel):
    """
    A stranded genomic interval [start, end].

    Coordinates are 1-based and inclusive, the convention used by GTF exons.
    The strand is kept as a plain string so that an unsupported value read
    from an annotation file reaches the classifier, which rejects it.
    """
    model_config = ConfigDict(frozen=True)

    chrom: str
    start: int = Field(ge=1, description="1-based start position (inclusive)")
    end: int = Field(ge=1, description="1-based end position (inclusive)")
    strand: str

    @model_validator(mode="after")
    def validate_interval(self) -> "GenomicInterval":
        if self.end < self.start:
            raise ValueError(f"End position ({self.end}) must be >= start position ({self.start})")
        return self


class Variant(BaseModel):
    """
    A point variant read from an input record.

    ``pos`` is the 0-based record position, so the variant covers [pos, pos+1).
    ``end`` is therefore the 1-based coordinate of the variant base and is the
    value compared against exon boundaries.
    """
    model_config = ConfigDict(frozen=True)

    chrom: str
    pos: int = Field(ge=0, description="0-based position of the variant")

    @property
    def start(self) -> int:
        return self.pos

    @property
    def end(self) -> int:
        return self.pos + 1


class ClassificationResult(BaseModel):
    """Outcome of classifying one variant against one transcript."""
    score: int = -1
    annotation: SpliceAnnotation = SpliceAnnotation.NON_SPLICE_REGION
    cis_effect_start: int
    cis_effect_end: int

    @classmethod
    def for_variant(cls, variant: Variant) -> "ClassificationResult":
        """Start a non-splice-region result with the window collapsed onto the variant."""
        return cls(cis_effect_start=variant.end, cis_effect_end=variant.end)

    @property
    def is_splice_region(self) -> bool:
        return self.annotation != SpliceAnnotation.NON_SPLICE_REGION


class AnnotatedVariant(BaseModel):
    """
    Per-variant accumulation of classification results across transcripts.

    ``genes`` is deduplicated in first-seen order; ``transcripts``,
    ``distances`` and ``annotations`` carry one entry per contributing
    transcript, in the same order.
    """
    variant: Variant
    genes: str = NA
    transcripts: str = NA
    distances: str = NA
    annotations: str = NA
    cis_effect_start: int
    cis_effect_end: int

    _seen_genes: set[str] = PrivateAttr(default_factory=set)

    @classmethod
    def for_variant(cls, variant: Variant) -> "AnnotatedVariant":
        return cls(variant=variant, cis_effect_start=variant.end, cis_effect_end=variant.end)

    def add_gene(self, gene_id: str) -> bool:
        """Record a contributing gene. Returns True the first time it is seen."""
        if gene_id in self._seen_genes:
            return False
        self._seen_genes.add(gene_id)
        return True

    @property
    def info_fields(self) -> dict[str, str]:
        """The four INFO values written to the output record."""
        return {
            "genes": self.genes,
            "transcripts": self.transcripts,
            "distances": self.distances,
            "annotations": self.annotations,
        }


class AnnotatorConfig(BaseModel):
    """
    Global configuration for a spliceannot run.
    """
    # Input
    variant_file: Path
    gtf_file: Path

    # Output, "-" writes to stdout
    output: str = "-"

    # Thresholds
    exonic_distance: int = Field(default=3, ge=0)
    intronic_distance: int = Field(default=2, ge=0)

    # Forced modes
    force_exonic: bool = False
    force_intronic: bool = False

    skip_single_exon_transcripts: bool = True

    @field_validator("variant_file", "gtf_file")
    @classmethod
    def validate_file_exists(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"File not found: {v}")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: str) -> str:
        if v != "-" and Path(v).is_dir():
            raise ValueError(f"Output path must be a file, not a directory: {v}")
        return v
