import argparse
import sys
from regiontree.BedHandler import BedHandler
from regiontree.Interval import GenomicInterval, VALID_STRANDS
from regiontree.TextColor import TextColor


def parse_region(region):
    """
    Parse a region string of the form chr:start-end
    :param region: region string, E.g.: chr3:100000-200000
    :return: chromosome_name, start, end
    """
    try:
        chromosome_name, coordinates = region.rsplit(':', 1)
        start, end = coordinates.replace(',', '').split('-')
        return chromosome_name, int(start), int(end)
    except ValueError:
        raise ValueError("INVALID REGION, EXPECTED chr:start-end GOT: " + region)


def query_region(bed_file_path, region, strand=None, dump=False):
    """
    Print every BED record that overlaps a region
    :param bed_file_path: BED file to index
    :param region: region string chr:start-end
    :param strand: only match records on this strand, all strands when None
    :param dump: print every node of the chromosome's tree
    :return: list of matching features
    """
    chromosome_name, start, end = parse_region(region)

    bed_handler = BedHandler(bed_file_path)
    trees_chromosomal = bed_handler.get_interval_trees()
    sys.stderr.write(TextColor.BLUE + "LOADED " + str(len(bed_handler)) + " RECORDS\n" + TextColor.END)

    if chromosome_name not in trees_chromosomal:
        sys.stderr.write(TextColor.YELLOW + "NO RECORDS ON " + chromosome_name + "\n" + TextColor.END)
        return []

    tree = trees_chromosomal[chromosome_name]
    if dump:
        tree.print_nodes()

    # overlap only matches records on the same strand
    strands = [strand] if strand is not None else VALID_STRANDS
    pairs = list()
    for query_strand in strands:
        pairs.extend(tree.search(GenomicInterval(chromosome_name, start, end, query_strand)))

    pairs.sort(key=lambda pair: pair[0])
    features = [feature for interval, feature in pairs]
    for feature in features:
        print(str(feature).rstrip('\n'))

    return features


if __name__ == '__main__':
    '''
    Processes arguments and prints the records of a BED file that overlap a region.
    '''
    parser = argparse.ArgumentParser()
    parser.register("type", "bool", lambda v: v.lower() == "true")
    parser.add_argument(
        "--bed",
        type=str,
        required=True,
        help="BED file to query."
    )
    parser.add_argument(
        "--region",
        type=str,
        required=True,
        help="Region to query E.g.: chr3:100000-200000"
    )
    parser.add_argument(
        "--strand",
        type=str,
        default=None,
        choices=list(VALID_STRANDS),
        help="Only report records on this strand."
    )
    parser.add_argument(
        "--dump",
        type="bool",
        default=False,
        help="Print every node of the chromosome's interval tree."
    )
    FLAGS, unparsed = parser.parse_known_args()
    query_region(bed_file_path=FLAGS.bed, region=FLAGS.region, strand=FLAGS.strand, dump=FLAGS.dump)

# usage example:
# python3 region_query.py --bed ConfidentRegions.hg19.chr1.bed --region chr1:1000000-1200000
