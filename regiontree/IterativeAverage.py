

class IterativeAverage:
    """
    Running mean, minimum and maximum of a stream of timings. Samples are folded in as they arrive and not stored.
    """
    def __init__(self):
        self.average = 0
        self.n = 0
        self.minimum = None
        self.maximum = None

    def update(self, x):
        """
        Fold another sample into the running statistics
        :param x: New sample
        :return:
        """
        self.average += (x - self.average) / (self.n + 1)
        self.n += 1

        if self.minimum is None or x < self.minimum:
            self.minimum = x
        if self.maximum is None or x > self.maximum:
            self.maximum = x

    def get_average(self):
        return self.average

    def get_number_of_elements(self):
        return self.n

    def summary(self):
        """
        One line description of the samples seen so far
        :return: string with count, mean, min and max
        """
        if self.n == 0:
            return "n=0"
        return "n=%d mean=%.3e min=%.3e max=%.3e" % (self.n, self.average, self.minimum, self.maximum)
