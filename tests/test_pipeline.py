"""
End-to-end tests: VCF in, annotated VCF out.
"""

import logging

import pysam
import pytest
from pydantic import ValidationError

from conftest import read_info
from spliceannot.errors import UndeclaredContigError, UnknownStrandError
from spliceannot.io.input import VcfReader
from spliceannot.io.output import ANNOTATION_INFO_FIELDS
from spliceannot.models.core import AnnotatorConfig
from spliceannot.pipeline import Pipeline


@pytest.fixture
def config(sample_vcf, sample_gtf, tmp_path):
    return AnnotatorConfig(
        variant_file=sample_vcf,
        gtf_file=sample_gtf,
        output=str(tmp_path / "annotated.vcf"),
    )


def test_pipeline_annotates_every_record(config):
    n_records = Pipeline(config).run()
    assert n_records == 5

    info = read_info(config.output)
    assert list(info) == ["v1", "v2", "v3", "v4", "v5"]

    assert info["v1"] == {
        "genes": "G1",
        "transcripts": "TX1,TX2",
        "distances": "1,1",
        "annotations": "splicing_exonic,splicing_exonic",
    }
    assert info["v2"]["annotations"] == "splicing_intronic,splicing_intronic"
    assert info["v2"]["distances"] == "2,2"
    assert info["v4"]["genes"] == "G2"
    for record_id in ("v3", "v5"):
        assert set(info[record_id].values()) == {"NA"}


def test_output_header_declares_fields(config):
    Pipeline(config).run()
    with pysam.VariantFile(config.output) as vcf:
        for field_id in ANNOTATION_INFO_FIELDS:
            assert field_id in vcf.header.info
            assert vcf.header.info[field_id].type == "String"
        records = list(vcf)
    assert [r.pos for r in records] == [199, 202, 250, 1101, 5050]


def test_force_exonic_with_single_exon_transcripts(config):
    config = config.model_copy(
        update={"force_exonic": True, "skip_single_exon_transcripts": False}
    )
    Pipeline(config).run()
    info = read_info(config.output)
    assert info["v5"]["annotations"] == "exonic"
    assert info["v5"]["genes"] == "G3"


def test_bgzipped_output(config, tmp_path):
    config = config.model_copy(update={"output": str(tmp_path / "annotated.vcf.gz")})
    Pipeline(config).run()
    with pysam.VariantFile(config.output) as vcf:
        assert len(list(vcf)) == 5


def test_unknown_strand_aborts_run(config, tmp_path):
    gtf_file = tmp_path / "unstranded.gtf"
    gtf_file.write_text(
        'chr1\ttest\texon\t100\t200\t.\t.\t.\tgene_id "G1"; transcript_id "TX1";\n'
        'chr1\ttest\texon\t300\t400\t.\t.\t.\tgene_id "G1"; transcript_id "TX1";\n'
    )
    config = config.model_copy(update={"gtf_file": gtf_file})
    with pytest.raises(UnknownStrandError):
        Pipeline(config).run()


def test_vcf_reader_positions(sample_vcf):
    with VcfReader(sample_vcf) as reader:
        variants = [variant for variant, _ in reader]
    assert variants[0].pos == 198
    assert variants[0].end == 199
    assert variants[0].chrom == "chr1"


def test_config_validation(sample_vcf, sample_gtf, tmp_path):
    with pytest.raises(ValidationError):
        AnnotatorConfig(variant_file=sample_vcf, gtf_file=tmp_path / "missing.gtf")
    with pytest.raises(ValidationError):
        AnnotatorConfig(variant_file=sample_vcf, gtf_file=sample_gtf, exonic_distance=-1)
    with pytest.raises(ValidationError):
        AnnotatorConfig(variant_file=sample_vcf, gtf_file=sample_gtf, output=str(tmp_path))

    config = AnnotatorConfig(variant_file=sample_vcf, gtf_file=sample_gtf)
    assert config.output == "-"
    assert (config.exonic_distance, config.intronic_distance) == (3, 2)
    assert config.skip_single_exon_transcripts
    assert not (config.force_exonic or config.force_intronic)


def test_forced_intronic_hides_intronic_distance(config, caplog):
    config = config.model_copy(update={"force_intronic": True})
    with caplog.at_level(logging.INFO, logger="spliceannot.pipeline"):
        Pipeline(config).run()
    assert "Intronic min distance" not in caplog.text
    assert "Exonic min distance: 3" in caplog.text
    assert "Not skipping single exon transcripts." not in caplog.text


def test_forced_exonic_hides_exonic_distance(config, caplog):
    config = config.model_copy(
        update={"force_exonic": True, "skip_single_exon_transcripts": False}
    )
    with caplog.at_level(logging.INFO, logger="spliceannot.pipeline"):
        Pipeline(config).run()
    assert "Exonic min distance" not in caplog.text
    assert "Intronic min distance: 2" in caplog.text
    assert "Not skipping single exon transcripts." in caplog.text


def test_undeclared_contig_names_chromosome(config, tmp_path):
    vcf_file = tmp_path / "two_contigs.vcf"
    vcf_file.write_text(
        "##fileformat=VCFv4.2\n"
        "##contig=<ID=chr1,length=100000>\n"
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        "chr1\t199\tv1\tA\tT\t.\tPASS\t.\n"
        "chr2\t199\tv2\tA\tT\t.\tPASS\t.\n"
    )
    config = config.model_copy(update={"variant_file": vcf_file})
    with pytest.raises(UndeclaredContigError, match="chr2"):
        Pipeline(config).run()
