import pytest
from regiontree.Interval import Interval, GenomicInterval


def test_start_after_end_is_rejected():
    with pytest.raises(ValueError):
        Interval(5, 3)


def test_empty_interval_is_allowed():
    interval = Interval(4, 4)
    assert interval.width == 0


def test_width():
    assert Interval(10, 15).width == 5


def test_half_open_overlap():
    assert Interval(1, 5).overlaps(Interval(4, 6))
    assert Interval(4, 6).overlaps(Interval(1, 5))
    assert not Interval(1, 5).overlaps(Interval(5, 8))
    assert not Interval(1, 5).overlaps(Interval(10, 15))


def test_covers_matches_overlaps_for_plain_intervals():
    assert Interval(1, 5).covers(Interval(3, 8))
    assert not Interval(1, 5).covers(Interval(5, 8))


def test_distance():
    assert Interval(1, 5).distance(Interval(4, 6)) == 0
    assert Interval(1, 5).distance(Interval(5, 8)) == 1
    assert Interval(1, 5).distance(Interval(10, 15)) == 6
    assert Interval(10, 15).distance(Interval(1, 5)) == 6


def test_ordering_by_start_then_end():
    intervals = [Interval(3, 8), Interval(1, 5), Interval(1, 2), Interval(10, 15)]
    assert sorted(intervals) == [Interval(1, 2), Interval(1, 5), Interval(3, 8), Interval(10, 15)]
    assert Interval(1, 5) == Interval(1, 5)
    assert Interval(1, 5) <= Interval(1, 5)
    assert Interval(1, 5) > Interval(1, 2)
    assert hash(Interval(1, 5)) == hash(Interval(1, 5))


def test_string_form():
    assert str(Interval(1, 5)) == "[1,5)"


def test_invalid_strand_is_rejected():
    with pytest.raises(ValueError):
        GenomicInterval("chr1", 1, 5, strand="x")


def test_genomic_start_after_end_is_rejected():
    with pytest.raises(ValueError):
        GenomicInterval("chr1", 9, 5)


def test_genomic_overlap_needs_matching_strand():
    forward = GenomicInterval("chr1", 100, 200, "+")
    reverse = GenomicInterval("chr1", 150, 250, "-")

    assert not forward.overlaps(reverse)
    assert forward.covers(reverse)
    assert forward.overlaps(GenomicInterval("chr1", 150, 250, "+"))


def test_genomic_intervals_on_other_chromosomes():
    first = GenomicInterval("chr1", 100, 200)
    second = GenomicInterval("chr2", 100, 200)

    assert not first.overlaps(second)
    assert not first.covers(second)
    assert first.distance(second) is None


def test_genomic_distance():
    first = GenomicInterval("chr1", 100, 200)
    assert first.distance(GenomicInterval("chr1", 150, 160)) == 0
    assert first.distance(GenomicInterval("chr1", 210, 220)) == 11


def test_genomic_ordering():
    intervals = [GenomicInterval("chr2", 1, 5),
                 GenomicInterval("chr1", 10, 20, "-"),
                 GenomicInterval("chr1", 10, 20, "+")]

    assert sorted(intervals) == [GenomicInterval("chr1", 10, 20, "+"),
                                 GenomicInterval("chr1", 10, 20, "-"),
                                 GenomicInterval("chr2", 1, 5)]
    assert GenomicInterval("chr1", 10, 20, "+") != GenomicInterval("chr1", 10, 20, "-")


def test_plain_and_genomic_intervals_are_not_ordered_together():
    plain = Interval(1, 5)
    genomic = GenomicInterval("chr1", 1, 5)

    assert plain != genomic
    assert genomic != plain
    with pytest.raises(TypeError):
        plain < genomic
    with pytest.raises(TypeError):
        genomic < plain
    with pytest.raises(TypeError):
        plain >= genomic
    with pytest.raises(TypeError):
        genomic <= plain


def test_genomic_string_form():
    assert str(GenomicInterval("chr3", 1, 5, "-")) == "chr3:[1,5)-"
