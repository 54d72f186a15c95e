from regiontree.Node import Node

"""
IntervalTree is a binary search tree keyed on intervals, where every node also stores the maximum end position of
its subtree. Values are kept in a bag per key interval, so inserting the same interval twice appends to one node.

The tree is not balanced on every insert. Each insert records how many left and right hops it took, and the tree
keeps the largest counts seen on each side. Once the two differ by more than the threshold the whole tree is
rebuilt from a sorted list of its nodes by inserting medians first.

Mutation happens in place and is not thread safe. A rebalance replaces every node in the tree.
"""
DEFAULT_REBALANCE_THRESHOLD = 15


class IntervalTree:
    """
    Augmented interval tree supporting overlap search over keys that provide start, end, overlaps() and ordering.
    """
    def __init__(self, nodes=None, threshold=DEFAULT_REBALANCE_THRESHOLD):
        """
        Create a tree, optionally built from a list of nodes
        :param nodes: Nodes to build the tree from, they are sorted and inserted medians first
        :param threshold: Allowed difference between left and right depth before the tree is rebuilt
        """
        self.root = None
        self.node_count = 0
        self.left_depth = 0
        self.right_depth = 0
        self.threshold = threshold
        self.rebalance_count = 0

        if nodes:
            self.insert_balanced(self._sort_nodes([node.clone() for node in nodes]))

    @staticmethod
    def _sort_nodes(nodes):
        # by start, equal starts fall back to the key order
        return sorted(nodes, key=lambda node: (node.interval.start, node.interval))

    def _update_depths(self, left_hops, right_hops):
        if left_hops > self.left_depth:
            self.left_depth = left_hops
        if right_hops > self.right_depth:
            self.right_depth = right_hops

    def insert(self, key, value):
        """
        Insert a single value under a key interval
        :param key: Key interval
        :param value: Value to store
        :return:
        """
        self.insert_values(key, [value])

    def insert_values(self, key, values):
        """
        Insert values under a key interval, then rebuild the tree if it has become too lopsided
        :param key: Key interval
        :param values: Values to store
        :return:
        """
        self._insert_region(key, values)

        if abs(self.left_depth - self.right_depth) > self.threshold:
            self.rebalance()

    def _insert_region(self, interval, values):
        """
        Find the node with exactly this interval and add values to it, or create it as a new leaf.
        Every node passed on the way down is widened to cover the new end position.
        :param interval: Key interval
        :param values: Values to store
        :return:
        """
        if self.root is None:
            self.root = Node(interval, values)
            self.node_count += 1
            return

        current = self.root
        left_hops = 0
        right_hops = 0

        while True:
            current.subtree_max = max(current.subtree_max, interval.end)

            if interval < current.interval:
                left_hops += 1
                if current.left_child is None:
                    current.left_child = Node(interval, values)
                    self.node_count += 1
                    break
                current = current.left_child
            elif current.interval < interval:
                right_hops += 1
                if current.right_child is None:
                    current.right_child = Node(interval, values)
                    self.node_count += 1
                    break
                current = current.right_child
            else:
                current.multiput(values)
                break

        self._update_depths(left_hops, right_hops)

    def insert_node(self, node):
        """
        Insert a whole node with its values. The node is detached from any children first.
        If a node with the same interval exists, the incoming values are added to the existing node.
        :param node: Node to insert
        :return:
        """
        node.clear_children()

        if self.root is None:
            self.root = node
            self.node_count += 1
            return

        current = self.root
        left_hops = 0
        right_hops = 0

        while True:
            current.subtree_max = max(current.subtree_max, node.interval.end)

            if node.interval < current.interval:
                left_hops += 1
                if current.left_child is None:
                    current.left_child = node
                    self.node_count += 1
                    break
                current = current.left_child
            elif current.interval < node.interval:
                right_hops += 1
                if current.right_child is None:
                    current.right_child = node
                    self.node_count += 1
                    break
                current = current.right_child
            else:
                current.multiput(node.data)
                break

        self._update_depths(left_hops, right_hops)

    def insert_balanced(self, nodes):
        """
        Insert the middle node of a sorted list, then the middle of the left half, then the right half. For a sorted
        list this gives a tree close to a complete binary tree.
        :param nodes: Nodes sorted by interval
        :return:
        """
        # stack of [low, high) index ranges, left half is popped first
        ranges = [(0, len(nodes))]

        while ranges:
            low, high = ranges.pop()
            if low >= high:
                continue

            middle = low + (high - low) // 2
            self.insert_node(nodes[middle])

            ranges.append((middle + 1, high))
            ranges.append((low, middle))

    def rebalance(self):
        """
        Throw away the current shape of the tree and rebuild it from a sorted copy of its nodes
        :return:
        """
        nodes = self.in_order()

        self.root = None
        self.node_count = 0
        self.left_depth = 0
        self.right_depth = 0

        self.insert_balanced(self._sort_nodes(nodes))
        self.rebalance_count += 1

    def in_order(self):
        """
        Copy every node of the tree, visiting a node before its left and then its right subtree.
        The copies have no children and can be inserted into another tree.
        :return: list of detached nodes
        """
        nodes = list()
        stack = [self.root] if self.root is not None else []

        while stack:
            node = stack.pop()
            nodes.append(node.clone())

            if node.right_child is not None:
                stack.append(node.right_child)
            if node.left_child is not None:
                stack.append(node.left_child)

        return nodes

    def _search_nodes(self, interval, covers=False):
        """
        Collect the nodes whose key overlaps the query, or covers it when covers is set
        """
        nodes = list()
        stack = [self.root] if self.root is not None else []

        while stack:
            node = stack.pop()
            matched = node.interval.covers(interval) if covers else node.overlaps(interval)
            if matched:
                nodes.append(node)

            # nothing below this node ends after the query starts
            if node.subtree_max < interval.start:
                continue

            if node.right_child is not None:
                stack.append(node.right_child)
            if node.left_child is not None:
                stack.append(node.left_child)

        return nodes

    def search(self, interval):
        """
        Find every value stored under a key interval that overlaps the query.
        Pairs are not deduplicated, repeated values in one node are all returned.
        :param interval: Query interval
        :return: list of (key interval, value)
        """
        results = list()
        for node in self._search_nodes(interval):
            results.extend(node.get())

        return results

    def contains_interval_subset(self, interval):
        """
        Whether the query lies entirely inside one of the key intervals of the tree
        :param interval: Query interval
        :return: True if some key covers the whole query
        """
        # covers ignores strand, a region holds a query on either strand
        for node in self._search_nodes(interval, covers=True):
            key = node.interval
            if key.start <= interval.start and interval.end <= key.end:
                return True

        return False

    def get(self):
        """
        Return every (key interval, value) pair in the tree, in traversal order
        :return: list of (key interval, value)
        """
        pairs = list()
        for node in self.in_order():
            pairs.extend(node.get())

        return pairs

    def size(self):
        """
        :return: number of values in the tree, over all nodes
        """
        total = 0
        stack = [self.root] if self.root is not None else []

        while stack:
            node = stack.pop()
            total += node.get_size()

            if node.left_child is not None:
                stack.append(node.left_child)
            if node.right_child is not None:
                stack.append(node.right_child)

        return total

    def count_nodes(self):
        """
        :return: number of distinct key intervals in the tree
        """
        return self.node_count

    def snapshot(self):
        """
        Copy the tree. The copy shares no nodes with this tree.
        :return: new IntervalTree
        """
        return IntervalTree(self.in_order(), threshold=self.threshold)

    def merge(self, tree):
        """
        Build a new tree holding the nodes of this tree and of another one. Neither tree is changed.
        :param tree: IntervalTree to merge with this one
        :return: new IntervalTree
        """
        merged_tree = self.snapshot()
        merged_tree.insert_balanced(self._sort_nodes(tree.in_order()))

        return merged_tree

    def map_values(self, function):
        """
        Build a new tree with the same key intervals and a function applied to every value
        :param function: Function applied to each value
        :return: new IntervalTree
        """
        nodes = [Node(node.interval, [function(value) for value in node.data]) for node in self.in_order()]

        return IntervalTree(nodes, threshold=self.threshold)

    def filter_tree(self, predicate):
        """
        Build a new tree keeping only the values that pass a predicate.
        Nodes left without values stay in the new tree.
        :param predicate: Function returning True for values to keep
        :return: new IntervalTree
        """
        nodes = [Node(node.interval, [value for value in node.data if predicate(value)])
                 for node in self.in_order()]

        return IntervalTree(nodes, threshold=self.threshold)

    def print_nodes(self):
        print("Printing all nodes in interval tree")
        for node in self._sort_nodes(self.in_order()):
            print(node.interval)
            for value in node.data:
                print(value)

    def __contains__(self, interval):
        return len(self._search_nodes(interval)) > 0

    def __len__(self):
        return self.size()
