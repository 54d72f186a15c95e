from regiontree.IntervalTree import IntervalTree, DEFAULT_REBALANCE_THRESHOLD
from regiontree.Interval import Interval
from regiontree.TsvHandler import TsvHandler
from collections import defaultdict


def intersect(bed_file_path_query, bed_file_path_reference, threshold=DEFAULT_REBALANCE_THRESHOLD):
    """
    Takes regions from file a and subsets them based on whether they are entirely contained in regions from file b
    :param bed_file_path_query: path to the BED file that will be subsetted (output contains these regions)
    :param bed_file_path_reference: path to the BED file that contains regions to subset with
    :param threshold: rebalance threshold of the reference trees
    :return: dictionary of chromosome name -> list of query records
    """
    interval_trees_chromosomal = load_chromosomal_interval_trees(bed_file_path_reference, threshold=threshold)

    intervals_subset_chromosomal = subset_intervals(bed_file_path_query=bed_file_path_query,
                                                    interval_trees_chromosomal=interval_trees_chromosomal)

    return intervals_subset_chromosomal


def load_chromosomal_interval_trees(bed_file_path, threshold=DEFAULT_REBALANCE_THRESHOLD):
    """
    Read a BED file and index it with one interval tree per chromosome
    :param bed_file_path: path to the BED file to index
    :param threshold: rebalance threshold of the trees
    :return: dictionary of chromosome name -> IntervalTree
    """
    tsv_handler = TsvHandler(tsv_file_path=bed_file_path)
    intervals_chromosomal = tsv_handler.get_bed_intervals_by_chromosome()

    return build_chromosomal_interval_trees(intervals_chromosomal=intervals_chromosomal, threshold=threshold)


def build_chromosomal_interval_trees(intervals_chromosomal, threshold=DEFAULT_REBALANCE_THRESHOLD):
    """
    Produce a dictionary of intervals trees, with one tree per chromosome
    :param intervals_chromosomal: dictionary of (interval, record) lists per chromosome name
    :param threshold: rebalance threshold of the trees
    :return: trees_chromosomal
    """
    trees_chromosomal = dict()

    for chromosome_name in intervals_chromosomal:
        tree = IntervalTree(threshold=threshold)

        for interval, record in intervals_chromosomal[chromosome_name]:
            tree.insert(interval, record)

        trees_chromosomal[chromosome_name] = tree

    return trees_chromosomal


def subset_intervals(bed_file_path_query, interval_trees_chromosomal):
    """
    Test a raw BED file against a dictionary of interval trees based on chromosome, output list of lists (BED format)
    :param bed_file_path_query: path to BED file to subset
    :param interval_trees_chromosomal: dictionary of interval trees per chromosome name
    :return: intervals_subset_chromosomal: a list of lists with first 3 items of each list of the format: chr start stop
    """
    tsv_handler = TsvHandler(tsv_file_path=bed_file_path_query)

    intervals_subset_chromosomal = defaultdict(list)

    for chromosome_name, intervals in tsv_handler.get_bed_intervals_by_chromosome().items():
        # no tree means no reference regions on this chromosome
        if chromosome_name not in interval_trees_chromosomal:
            continue

        tree = interval_trees_chromosomal[chromosome_name]
        for interval, line in intervals:
            if tree.contains_interval_subset(interval):
                intervals_subset_chromosomal[chromosome_name].append(line)

    return intervals_subset_chromosomal


def annotate_overlaps(bed_file_path_query, interval_trees_chromosomal):
    """
    Pair every query record with the reference records it overlaps, keeping the query file order
    :param bed_file_path_query: path to BED file to annotate
    :param interval_trees_chromosomal: dictionary of interval trees per chromosome name
    :return: list of (query record, list of overlapping reference records)
    """
    tsv_handler = TsvHandler(tsv_file_path=bed_file_path_query)

    annotated_records = list()
    for line in tsv_handler.read_records():
        chromosome_name, start, stop = tsv_handler.parse_bed_line(line)

        overlapping_records = list()
        if chromosome_name in interval_trees_chromosomal:
            tree = interval_trees_chromosomal[chromosome_name]
            pairs = sorted(tree.search(Interval(start, stop)), key=lambda pair: pair[0])
            overlapping_records = [record for interval, record in pairs]

        annotated_records.append((line, overlapping_records))

    return annotated_records
