

class Node:
    """
    A single node of the interval tree. Holds one key interval, every value inserted under that exact interval
    and the largest end position found anywhere in the subtree rooted at this node.
    """
    def __init__(self, interval, data=None):
        """
        :param interval: Key interval of the node
        :param data: Optional values to start the bag with
        """
        self.interval = interval
        self.data = list(data) if data is not None else list()

        self.left_child = None
        self.right_child = None

        # max(end) over this node and both subtrees, search prunes on it
        self.subtree_max = interval.end

    def put(self, value):
        self.data.append(value)

    def multiput(self, values):
        """
        Append a sequence of values to the bag. Duplicates are kept.
        :param values: Values to add
        :return:
        """
        self.data.extend(values)

    def get(self):
        """
        Return every value of the node paired with the node's interval
        :return: list of (interval, value)
        """
        return [(self.interval, value) for value in self.data]

    def get_size(self):
        return len(self.data)

    def overlaps(self, interval):
        return self.interval.overlaps(interval)

    def clear_children(self):
        self.left_child = None
        self.right_child = None
        self.subtree_max = self.interval.end

    def clone(self):
        """
        Copy this node without its children, so it can be attached to another tree.
        Values are shared, the bag holding them is not.
        :return: detached Node
        """
        return Node(self.interval, self.data)

    def __repr__(self):
        return "Node(%s, %d values, subtree_max=%d)" % (self.interval, len(self.data), self.subtree_max)
