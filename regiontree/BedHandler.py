import os
from collections import defaultdict
from pybedtools import BedTool
from regiontree.Interval import GenomicInterval, UNSTRANDED, VALID_STRANDS
from regiontree.IntervalTree import IntervalTree, DEFAULT_REBALANCE_THRESHOLD

"""
This class handles bed files using pybedtools.
"""


class BedHandler:
    """
    Loads a BED file with the pybedtools API and indexes its features in interval trees
    """
    def __init__(self, bed_file_path):
        """
        Create a BedTool object given the path to a bed file
        :param bed_file_path: full path to a bed file
        """
        if not os.path.isfile(bed_file_path):
            raise IOError("BED FILE READ ERROR: " + str(bed_file_path))

        self.bed_file_path = bed_file_path
        self.bed_file = BedTool(self.bed_file_path)

    @staticmethod
    def feature_to_interval(feature):
        """
        Convert a pybedtools feature to a GenomicInterval. Features without a usable strand are unstranded.
        :param feature: pybedtools Interval
        :return: GenomicInterval
        """
        strand = feature.strand if feature.strand in VALID_STRANDS else UNSTRANDED

        return GenomicInterval(feature.chrom, feature.start, feature.end, strand)

    def get_interval_trees(self, threshold=DEFAULT_REBALANCE_THRESHOLD):
        """
        Build one interval tree per chromosome, with each feature stored under its own region
        :param threshold: Rebalance threshold for every tree
        :return: dictionary of chromosome name -> IntervalTree
        """
        trees_chromosomal = defaultdict(lambda: IntervalTree(threshold=threshold))

        for feature in self.bed_file:
            interval = self.feature_to_interval(feature)
            trees_chromosomal[interval.chromosome_name].insert(interval, feature)

        return dict(trees_chromosomal)

    def __getitem__(self, index):
        return self.bed_file[index]

    def __len__(self):
        return len(self.bed_file)
