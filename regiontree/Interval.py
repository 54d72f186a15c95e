from functools import total_ordering

"""
Interval key types for the interval tree.

The tree does not require keys to inherit from anything. A key only needs:
- start, end:   integer coordinates, 0-based and half-open [start, end)
- overlaps():   whether two keys intersect
- __lt__():     a strict total order used to place keys in the tree

covers() and distance() complete the contract for downstream callers, the tree never uses them.
"""
UNSTRANDED = '.'
VALID_STRANDS = ('+', '-', UNSTRANDED)


@total_ordering
class Interval:
    """
    A 0-based coordinate range with a closed start and an open end.
    """
    def __init__(self, start, end):
        """
        Create an interval, start must not be greater than end.
        :param start: First position in the interval
        :param end: First position after the interval
        """
        if start > end:
            raise ValueError("INVALID INTERVAL: START " + str(start) + " IS GREATER THAN END " + str(end))

        self.start = start
        self.end = end

    @property
    def width(self):
        return self.end - self.start

    def overlaps(self, interval):
        """
        Whether this interval shares at least one position with another interval.
        :param interval: Interval to compare against
        :return: True if they intersect
        """
        return self.start < interval.end and interval.start < self.end

    def covers(self, interval):
        # nothing to project away in a plain coordinate space
        return self.overlaps(interval)

    def distance(self, interval):
        """
        Distance between two intervals. Overlapping intervals are 0 apart, adjacent ones are 1 apart.
        :param interval: Interval to measure against
        :return: distance in positions
        """
        if self.overlaps(interval):
            return 0
        if self.start >= interval.end:
            return self.start - interval.end + 1
        return interval.start - self.end + 1

    def _sort_key(self):
        return self.start, self.end

    # keys of different types are not ordered against each other
    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self):
        return hash(self._sort_key())

    def __str__(self):
        return "[" + str(self.start) + "," + str(self.end) + ")"

    def __repr__(self):
        return "Interval(%d, %d)" % (self.start, self.end)


class GenomicInterval(Interval):
    """
    A region on a named chromosome with an optional strand.
    Overlap needs a matching chromosome and strand, cover ignores the strand.
    """
    def __init__(self, chromosome_name, start, end, strand=UNSTRANDED):
        """
        :param chromosome_name: Chromosome name, E.g.: chr3
        :param start: 0-based start position
        :param end: Position after the last base of the region
        :param strand: One of +, - or .
        """
        if strand not in VALID_STRANDS:
            raise ValueError("INVALID STRAND: " + str(strand))

        super().__init__(start, end)
        self.chromosome_name = chromosome_name
        self.strand = strand

    def overlaps(self, interval):
        return self.covers(interval) and self.strand == getattr(interval, 'strand', UNSTRANDED)

    def covers(self, interval):
        if self.chromosome_name != getattr(interval, 'chromosome_name', self.chromosome_name):
            return False
        return self.start < interval.end and interval.start < self.end

    def distance(self, interval):
        """
        :param interval: Interval to measure against
        :return: distance in positions, or None when the regions are on different chromosomes
        """
        if self.chromosome_name != getattr(interval, 'chromosome_name', self.chromosome_name):
            return None
        if self.covers(interval):
            return 0
        if self.start >= interval.end:
            return self.start - interval.end + 1
        return interval.start - self.end + 1

    def _sort_key(self):
        return self.chromosome_name, self.start, self.end, self.strand

    def __str__(self):
        return self.chromosome_name + ":" + super().__str__() + self.strand

    def __repr__(self):
        return "GenomicInterval(%r, %d, %d, %r)" % (self.chromosome_name, self.start, self.end, self.strand)
