class SimClock:
    """
    Simulated hardware clock, counts elapsed nanoseconds.
    Shared by reference between the levels of one simulator.
    """
    def __init__(self, start=0):
        self.now = start

    def current_time(self):
        return self.now

    def advance_time(self, nanoseconds):
        """
        Move the clock forward
        :param nanoseconds: int, must be non-negative
        :return: the new current time
        """
        if nanoseconds < 0:
            raise ValueError(f"Cannot advance clock by a negative amount: {nanoseconds}")
        self.now += nanoseconds
        return self.now
