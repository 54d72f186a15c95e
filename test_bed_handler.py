import pytest

pytest.importorskip("pybedtools")

import region_query
from regiontree.BedHandler import BedHandler
from regiontree.Interval import GenomicInterval

TRANSCRIPTS_BED = """chr1\t100\t500\ttx_1\t0\t+
chr1\t400\t900\ttx_2\t0\t-
chr1\t2000\t2500\ttx_3\t0\t+
chr2\t100\t300\ttx_4\t0\t-
"""

REGIONS_BED = """chr1\t100\t500
chr1\t100\t500
chr1\t450\t600
"""


@pytest.fixture
def transcripts_bed(tmp_path):
    path = tmp_path / "transcripts.bed"
    path.write_text(TRANSCRIPTS_BED)
    return str(path)


@pytest.fixture
def regions_bed(tmp_path):
    path = tmp_path / "regions.bed"
    path.write_text(REGIONS_BED)
    return str(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(IOError):
        BedHandler(str(tmp_path / "missing.bed"))


def test_length_and_indexing(transcripts_bed):
    bed_handler = BedHandler(transcripts_bed)

    assert len(bed_handler) == 4
    assert bed_handler[2].name == "tx_3"


def test_trees_are_built_per_chromosome(transcripts_bed):
    trees = BedHandler(transcripts_bed).get_interval_trees()

    assert sorted(trees) == ["chr1", "chr2"]
    assert trees["chr1"].count_nodes() == 3
    assert trees["chr2"].size() == 1


def test_stranded_search(transcripts_bed):
    tree = BedHandler(transcripts_bed).get_interval_trees()["chr1"]

    forward = tree.search(GenomicInterval("chr1", 450, 460, "+"))
    reverse = tree.search(GenomicInterval("chr1", 450, 460, "-"))

    assert [feature.name for interval, feature in forward] == ["tx_1"]
    assert [feature.name for interval, feature in reverse] == ["tx_2"]


def test_unstranded_records_share_a_node(regions_bed):
    tree = BedHandler(regions_bed).get_interval_trees(threshold=2)["chr1"]

    assert tree.threshold == 2
    assert tree.count_nodes() == 2
    assert tree.size() == 3
    assert len(tree.search(GenomicInterval("chr1", 460, 470))) == 3


def test_parse_region():
    assert region_query.parse_region("chr3:100,000-200,000") == ("chr3", 100000, 200000)

    with pytest.raises(ValueError):
        region_query.parse_region("chr3")


def test_query_region_searches_all_strands(transcripts_bed, capsys):
    features = region_query.query_region(transcripts_bed, "chr1:450-460")

    assert [feature.name for feature in features] == ["tx_1", "tx_2"]
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["chr1\t100\t500\ttx_1\t0\t+", "chr1\t400\t900\ttx_2\t0\t-"]


def test_query_region_with_strand_and_dump(transcripts_bed, capsys):
    features = region_query.query_region(transcripts_bed, "chr1:0-3000", strand="+", dump=True)

    assert [feature.name for feature in features] == ["tx_1", "tx_3"]
    out = capsys.readouterr().out
    assert "Printing all nodes in interval tree" in out
    assert "chr1:[400,900)-" in out


def test_query_region_unknown_chromosome(transcripts_bed, capsys):
    assert region_query.query_region(transcripts_bed, "chrX:0-100") == []
    assert "NO RECORDS ON chrX" in capsys.readouterr().err
