import csv
import os
from collections import defaultdict
from regiontree.Interval import Interval, GenomicInterval

"""
TsvHandler reads BED-like tab separated files. Each record keeps its raw line next to the interval built from it,
so callers can write the original record back out after querying a tree.

BED coordinates are 0-based and half-open, the same convention as Interval, so no offsets are needed by default.
"""
BED_COMMENT_PREFIXES = ('#', 'track', 'browser')


class TsvHandler:
    def __init__(self, tsv_file_path):
        """
        :param tsv_file_path: Path to a BED/TSV file
        """
        if not os.path.isfile(tsv_file_path):
            raise IOError("BED FILE READ ERROR: " + str(tsv_file_path))

        self.tsv_file_path = tsv_file_path

    @staticmethod
    def parse_bed_line(line, start_offset=0, stop_offset=0, universal_offset=0):
        """
        Pull the chromosome and shifted coordinates out of a BED record
        :param line: A BED record split on tabs
        :param start_offset: Added to the start only
        :param stop_offset: Added to the stop only
        :param universal_offset: Added to both start and stop
        :return: chromosome_name, start, stop
        """
        if len(line) < 3:
            raise ValueError("INVALID BED RECORD: " + "\t".join(line))

        chromosome_name, start, stop = line[0:3]
        try:
            start = int(start) + start_offset + universal_offset
            stop = int(stop) + stop_offset + universal_offset
        except ValueError:
            raise ValueError("INVALID BED COORDINATES: " + "\t".join(line))

        return chromosome_name, start, stop

    def read_records(self):
        """
        Yield every BED record in the file, skipping blank, comment, track and browser lines
        :return: generator of lists of fields
        """
        with open(self.tsv_file_path, 'r') as tsv_file:
            reader = csv.reader(tsv_file, delimiter='\t')

            for line in reader:
                if len(line) == 0 or line[0].strip() == '' or line[0].startswith(BED_COMMENT_PREFIXES):
                    continue
                yield line

    def get_bed_intervals(self):
        """
        :return: list of (GenomicInterval, line) for every record in the file
        """
        intervals = list()
        for line in self.read_records():
            chromosome_name, start, stop = self.parse_bed_line(line)
            intervals.append((GenomicInterval(chromosome_name, start, stop), line))

        return intervals

    def get_subset_of_bed_intervals(self, start, stop, start_offset=0, stop_offset=0, universal_offset=0):
        """
        Collect the records whose shifted coordinates overlap the window [start, stop)
        :param start: Window start
        :param stop: Window stop
        :param start_offset: Added to each record's start
        :param stop_offset: Added to each record's stop
        :param universal_offset: Added to both ends of each record
        :return: list of (Interval, line)
        """
        window = Interval(start, stop)

        intervals = list()
        for line in self.read_records():
            chromosome_name, bed_start, bed_stop = self.parse_bed_line(line,
                                                                       start_offset=start_offset,
                                                                       stop_offset=stop_offset,
                                                                       universal_offset=universal_offset)
            interval = Interval(bed_start, bed_stop)

            if interval.overlaps(window):
                intervals.append((interval, line))

        return intervals

    def get_bed_intervals_by_chromosome(self, start_offset=0, stop_offset=0, universal_offset=0):
        """
        Group the records of the file by chromosome name
        :param start_offset: Added to each record's start
        :param stop_offset: Added to each record's stop
        :param universal_offset: Added to both ends of each record
        :return: dictionary of chromosome name -> list of (Interval, line)
        """
        intervals_chromosomal = defaultdict(list)

        for line in self.read_records():
            chromosome_name, start, stop = self.parse_bed_line(line,
                                                               start_offset=start_offset,
                                                               stop_offset=stop_offset,
                                                               universal_offset=universal_offset)

            intervals_chromosomal[chromosome_name].append((Interval(start, stop), line))

        return intervals_chromosomal
