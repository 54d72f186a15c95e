import argparse
import random
import sys
from time import time
from regiontree.Interval import Interval
from regiontree.IntervalTree import IntervalTree, DEFAULT_REBALANCE_THRESHOLD
from regiontree.IterativeAverage import IterativeAverage
from regiontree.TextColor import TextColor

MAX_INTERVAL_WIDTH = 500
POSITION_SPACING = 200


def generate_intervals(n_intervals, seed):
    """
    Make n intervals with increasing starts and random widths
    :param n_intervals: number of intervals
    :param seed: random seed
    :return: list of Interval sorted by start
    """
    generator = random.Random(seed)

    intervals = list()
    for i in range(n_intervals):
        start = i * POSITION_SPACING + generator.randint(0, POSITION_SPACING - 1)
        intervals.append(Interval(start, start + generator.randint(1, MAX_INTERVAL_WIDTH)))

    return intervals


def time_tree(intervals, threshold):
    """
    Build a tree from intervals in the given order, then look up the start of every interval, printing the time cost
    :param intervals: intervals in insertion order
    :param threshold: rebalance threshold
    :return: the tree
    """
    time1 = time()

    tree = IntervalTree(threshold=threshold)
    for i, interval in enumerate(intervals):
        tree.insert(interval, i)

    time2 = time()
    sys.stderr.write(TextColor.BLUE + "tree built:       " + str(time2 - time1) + "\n" + TextColor.END)
    sys.stderr.write("rebalances:       " + str(tree.rebalance_count) + "\n")

    query_times = IterativeAverage()
    for interval in intervals:
        query_start = time()
        matches = tree.search(Interval(interval.start, interval.start + 1))
        query_times.update(time() - query_start)

        if len(matches) == 0:
            sys.stderr.write(TextColor.RED + "WARNING no matches: " + str(interval) + "\n" + TextColor.END)

    time3 = time()
    sys.stderr.write(TextColor.BLUE + "tree accessed:    " + str(time3 - time2) + "\n" + TextColor.END)
    sys.stderr.write("query times:      " + query_times.summary() + "\n")

    return tree


def run_benchmark(n_intervals, threshold, seed):
    """
    Time an ascending build (worst case for an unbalanced tree) against a shuffled build
    :return:
    """
    intervals = generate_intervals(n_intervals, seed)

    sys.stderr.write(TextColor.PURPLE + "ASCENDING INSERTION\n" + TextColor.END)
    time_tree(intervals, threshold)

    shuffled = list(intervals)
    random.Random(seed).shuffle(shuffled)

    sys.stderr.write(TextColor.PURPLE + "SHUFFLED INSERTION\n" + TextColor.END)
    time_tree(shuffled, threshold)


if __name__ == '__main__':
    '''
    Processes arguments and times interval tree builds and queries.
    '''
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--n_intervals",
        type=int,
        default=100000,
        help="Number of intervals to insert."
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_REBALANCE_THRESHOLD,
        help="Depth difference that triggers a tree rebalance."
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed."
    )
    FLAGS, unparsed = parser.parse_known_args()
    run_benchmark(n_intervals=FLAGS.n_intervals, threshold=FLAGS.threshold, seed=FLAGS.seed)
