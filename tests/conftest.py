"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from spliceannot.io.gtf import TranscriptTable  # noqa: E402
from spliceannot.models.core import GenomicInterval  # noqa: E402

# transcript_id, gene_id, strand, exons (1-based inclusive)
TRANSCRIPTS = [
    ("TX1", "G1", "+", [(100, 200), (300, 400)]),
    ("TX2", "G1", "+", [(150, 200), (300, 350)]),
    # Minus strand GTFs usually list exons in transcription order
    ("TX3", "G2", "-", [(1200, 1300), (1000, 1100)]),
    ("TX4", "G3", "+", [(5000, 5100)]),
]


def gtf_lines(chrom: str = "chr1") -> list[str]:
    lines = ["#!genome-build test"]
    for transcript_id, gene_id, strand, exons in TRANSCRIPTS:
        attrs = f'gene_id "{gene_id}"; transcript_id "{transcript_id}";'
        span = (min(s for s, _ in exons), max(e for _, e in exons))
        lines.append(f"{chrom}\ttest\ttranscript\t{span[0]}\t{span[1]}\t.\t{strand}\t.\t{attrs}")
        for n, (start, end) in enumerate(exons, start=1):
            lines.append(
                f"{chrom}\ttest\texon\t{start}\t{end}\t.\t{strand}\t.\t{attrs} exon_number \"{n}\";"
            )
    return lines


def exon_list(strand: str, *pairs: tuple[int, int], chrom: str = "chr1") -> list[GenomicInterval]:
    """Exons sorted by ascending coordinate."""
    return [
        GenomicInterval(chrom=chrom, start=start, end=end, strand=strand)
        for start, end in sorted(pairs)
    ]


@pytest.fixture
def sample_gtf(tmp_path: Path) -> Path:
    """Small GTF with two genes on each strand and a single exon transcript."""
    gtf_file = tmp_path / "annotations.gtf"
    gtf_file.write_text("\n".join(gtf_lines()) + "\n")
    return gtf_file


@pytest.fixture
def transcript_table() -> TranscriptTable:
    table = TranscriptTable()
    for transcript_id, gene_id, strand, exons in TRANSCRIPTS:
        for exon in exon_list(strand, *exons):
            table.add_exon(transcript_id, gene_id, exon)
    return table.build()


@pytest.fixture
def sample_vcf(tmp_path: Path) -> Path:
    """VCF with one variant per interesting position of the sample GTF."""
    vcf_file = tmp_path / "variants.vcf"
    header = [
        "##fileformat=VCFv4.2",
        "##contig=<ID=chr1,length=100000>",
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
    ]
    records = [
        "chr1\t199\tv1\tA\tT\t.\tPASS\t.",
        "chr1\t202\tv2\tA\tT\t.\tPASS\t.",
        "chr1\t250\tv3\tA\tT\t.\tPASS\t.",
        "chr1\t1101\tv4\tA\tT\t.\tPASS\t.",
        "chr1\t5050\tv5\tA\tT\t.\tPASS\t.",
    ]
    vcf_file.write_text("\n".join(header + records) + "\n")
    return vcf_file


def read_info(vcf_file: Path) -> dict[str, dict[str, str]]:
    """Map record ID to its INFO fields, read from a plain-text VCF."""
    info_by_id = {}
    with open(vcf_file) as f:
        for line in f:
            if line.startswith("#"):
                continue
            fields = line.rstrip("\n").split("\t")
            info = {}
            for item in fields[7].split(";"):
                key, _, value = item.partition("=")
                info[key] = value
            info_by_id[fields[2]] = info
    return info_by_id
