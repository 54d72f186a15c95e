import argparse
import sys
import time
from regiontree.Intersector import load_chromosomal_interval_trees, annotate_overlaps
from regiontree.Interval import Interval
from regiontree.IntervalTree import DEFAULT_REBALANCE_THRESHOLD
from regiontree.TextColor import TextColor
from regiontree.TsvHandler import TsvHandler

NAME_COLUMN = 3


def get_record_name(record):
    """
    Name of a reference record, falling back to its coordinates for BED3 files
    :param record: BED record as a list of fields
    :return: name string
    """
    if len(record) > NAME_COLUMN and record[NAME_COLUMN] != '':
        return record[NAME_COLUMN]
    return record[0] + ":" + record[1] + "-" + record[2]


def mark_confident(candidate_bed, interval_trees_chromosomal):
    """
    Print every candidate record with a trailing 1 if it lies entirely inside a confident region, 0 otherwise
    :param candidate_bed: path to the candidate BED file
    :param interval_trees_chromosomal: confident region trees per chromosome
    :return:
    """
    tsv_handler = TsvHandler(tsv_file_path=candidate_bed)

    for line in tsv_handler.read_records():
        chromosome_name, start, stop = tsv_handler.parse_bed_line(line)
        in_confident = "0"

        # if there is an interval tree for this chromosome, test whether the candidate is a subset of a window
        if chromosome_name in interval_trees_chromosomal:
            if interval_trees_chromosomal[chromosome_name].contains_interval_subset(Interval(start, stop)):
                in_confident = "1"
        print("\t".join(line) + "\t" + in_confident)


def annotate(candidate_bed, interval_trees_chromosomal):
    """
    Print every candidate record with the number and names of the reference regions it overlaps
    :param candidate_bed: path to the candidate BED file
    :param interval_trees_chromosomal: reference region trees per chromosome
    :return:
    """
    annotated_records = annotate_overlaps(bed_file_path_query=candidate_bed,
                                          interval_trees_chromosomal=interval_trees_chromosomal)

    for line, overlapping_records in annotated_records:
        names = [get_record_name(record) for record in overlapping_records]
        print("\t".join(line) + "\t" + str(len(names)) + "\t" + (",".join(names) if names else "."))


def intersect(candidate_bed, confident_bed, mode, threshold):
    start_time = time.time()
    interval_trees_chromosomal = load_chromosomal_interval_trees(confident_bed, threshold=threshold)

    total_nodes = sum(tree.count_nodes() for tree in interval_trees_chromosomal.values())
    sys.stderr.write(TextColor.BLUE + "LOADED " + str(total_nodes) + " REGIONS ON " +
                     str(len(interval_trees_chromosomal)) + " CHROMOSOMES\n" + TextColor.END)

    if mode == "subset":
        mark_confident(candidate_bed, interval_trees_chromosomal)
    else:
        annotate(candidate_bed, interval_trees_chromosomal)

    sys.stderr.write(TextColor.CYAN + "TIME ELAPSED: " + str(time.time() - start_time) + "\n" + TextColor.END)


if __name__ == '__main__':
    '''
    Processes arguments and intersects candidate regions with reference regions.
    '''
    parser = argparse.ArgumentParser()
    parser.register("type", "bool", lambda v: v.lower() == "true")
    parser.add_argument(
        "--candidate_bed",
        type=str,
        required=True,
        help="Candidate bed file."
    )
    parser.add_argument(
        "--confident_bed",
        type=str,
        required=True,
        help="Bed file containing confident windows."
    )
    parser.add_argument(
        "--mode",
        type=str,
        default="subset",
        choices=["subset", "annotate"],
        help="subset: flag candidates inside a confident window. annotate: list overlapping windows."
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_REBALANCE_THRESHOLD,
        help="Depth difference that triggers a tree rebalance."
    )
    FLAGS, unparsed = parser.parse_known_args()
    intersect(candidate_bed=FLAGS.candidate_bed,
              confident_bed=FLAGS.confident_bed,
              mode=FLAGS.mode,
              threshold=FLAGS.threshold)

# usage example:
# python3 bed_intersector.py --candidate_bed candidates.bed --confident_bed ConfidentRegions.hg19.chr1.bed
