"""Tests for reading, writing and summarising SNP files."""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest

from snpthin.core.record import SNP
from snpthin.errors import InputUnavailable, MalformedRecord, OutputUnavailable
from snpthin.io import SNPReader, SNPWriter, SummaryWriter, format_snp

from .helpers import beagle_line, write_beagle, write_simple


def make_reader(threads: int = 1, chunk_size: int = None) -> SNPReader:
    reader = SNPReader(Mock(), logging.getLogger("tests.io"), threads=threads)
    if chunk_size is not None:
        reader.CHUNK_SIZE = chunk_size
    return reader


class TestSNPReader:
    def test_reads_simple_and_skips_blank_lines(self, tmp_path: Path):
        path = tmp_path / "in.tsv"
        path.write_text("chr1\t100\n\nchr2\t5\n   \nchr1\t7\n")
        snps = make_reader().read(path, "simple")
        assert snps == [SNP("chr1", 100), SNP("chr2", 5), SNP("chr1", 7)]

    def test_reads_beagle(self, tmp_path: Path):
        variants = [
            {"scaffold": "scafA", "pos": 10, "ref": 1, "alt": 0},
            {"scaffold": "scafB", "pos": 20, "probs": ["1", "0", "0", "0.5", "0.5", "0"]},
        ]
        path = write_beagle(tmp_path / "in.beagle", variants)
        snps = make_reader().read(path, "beagle")
        assert [(s.scaffold, s.pos) for s in snps] == [("scafA", 10), ("scafB", 20)]
        assert snps[0].a_ref == "1"
        assert snps[1].probabilities == ("1", "0", "0", "0.5", "0.5", "0")

    def test_blank_line_in_beagle_is_malformed(self, tmp_path: Path):
        path = tmp_path / "in.beagle"
        path.write_text(beagle_line({"scaffold": "s", "pos": 1}) + "\n\n")
        with pytest.raises(MalformedRecord) as exc:
            make_reader().read(path, "beagle")
        assert exc.value.line_number == 2

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(InputUnavailable):
            make_reader().read(tmp_path / "absent.tsv", "simple")

    def test_malformed_line_reports_line_number(self, tmp_path: Path):
        path = tmp_path / "in.tsv"
        path.write_text("chr1\t100\n\nchr1\tabc\n")
        with pytest.raises(MalformedRecord) as exc:
            make_reader().read(path, "simple")
        assert exc.value.line_number == 3
        assert exc.value.line == "chr1\tabc"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            make_reader().decode([(1, "chr1\t1")], "vcf")

    def test_parallel_decoding_matches_sequential(self, tmp_path: Path):
        rows = [(f"chr{i % 4}", i * 37) for i in range(200)]
        path = write_simple(tmp_path / "in.tsv", rows)
        sequential = make_reader().read(path, "simple")
        parallel = make_reader(threads=3, chunk_size=16).read(path, "simple")
        assert parallel == sequential
        assert [(s.scaffold, s.pos) for s in parallel] == rows

    def test_parallel_decoding_reports_first_bad_line(self, tmp_path: Path):
        lines = [f"chr1\t{i}" for i in range(100)]
        lines[40] = "chr1\tbad40"
        lines[80] = "chr1\tbad80"
        path = tmp_path / "in.tsv"
        path.write_text("\n".join(lines) + "\n")
        with pytest.raises(MalformedRecord) as exc:
            make_reader(threads=2, chunk_size=10).read(path, "simple")
        assert exc.value.line_number == 41

    def test_memory_checks(self, tmp_path: Path):
        path = write_beagle(tmp_path / "in.beagle", [{"scaffold": "s", "pos": 1}])
        reader = make_reader()
        reader.read(path, "beagle")
        reader.memory_monitor.check_memory_and_warn.assert_called_once_with("decoding")
        reader.memory_monitor.warn_for_large_dataset.assert_called_once_with(1, 3)


class TestSNPWriter:
    def test_simple_format(self):
        assert format_snp(SNP("chr1", 100), "simple") == "chr1:100\n"

    def test_beagle_format(self):
        snp = SNP("c", 1, name="a_b_c_1", a_ref="0", a_alt="2", probabilities=("0.5", "0.5"))
        assert format_snp(snp, "beagle") == "a_b_c_1\t0\t2\t0.5\t0.5\n"

    def test_beagle_format_requires_payload(self):
        with pytest.raises(ValueError):
            format_snp(SNP("chr1", 100), "beagle")

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            format_snp(SNP("chr1", 100), "vcf")

    def test_beagle_round_trip_is_byte_identical(self, tmp_path: Path):
        text = "x_y_scaf1_10\t3\t1\t0.000001\t0.999999\t0\n"
        src = tmp_path / "in.beagle"
        src.write_text(text)
        snps = make_reader().read(src, "beagle")
        out = tmp_path / "out.beagle"
        assert SNPWriter().write(snps, out, "beagle") == 1
        assert out.read_text() == text

    def test_unwritable_output(self, tmp_path: Path):
        with pytest.raises(OutputUnavailable):
            SNPWriter().write([SNP("chr1", 1)], tmp_path / "missing" / "out.snps", "simple")


class TestSummaryWriter:
    def test_statistics_per_input_scaffold(self):
        records = [
            SNP("chr2", 10),
            SNP("chr1", 100),
            SNP("chr1", 5000),
            SNP("chr1", 2500),
            SNP("chr3", 1),
        ]
        selected = [SNP("chr1", 5000), SNP("chr1", 100), SNP("chr1", 2500), SNP("chr2", 10)]
        stats = SummaryWriter().compute_statistics(records, selected)
        assert [s.scaffold for s in stats] == ["chr1", "chr2", "chr3"]
        assert [s.input_snps for s in stats] == [3, 1, 1]
        assert [s.selected_snps for s in stats] == [3, 1, 0]
        assert [s.min_gap for s in stats] == [2400, None, None]

    def test_write_summary(self, tmp_path: Path):
        records = [SNP("chr1", 100), SNP("chr1", 150), SNP("chr2", 100)]
        selected = [SNP("chr2", 100), SNP("chr1", 150)]
        out = tmp_path / "sub" / "summary.tsv"
        SummaryWriter().write_summary(records, selected, out)
        assert out.read_text().splitlines() == [
            "scaffold\tinput_snps\tselected_snps\tmin_gap",
            "chr1\t2\t1\tNA",
            "chr2\t1\t1\tNA",
        ]
