from abc import abstractmethod, ABC

class MemoryLevel(ABC):
    """
    Base for every stage an access passes through. Levels that cost time share one simulated clock.
    """
    def __init__(self, name, lower_level=None, clock=None):
        self.name = name
        self.lower_level = lower_level
        self.clock = clock

    def charge(self, latency):
        """
        Advance the shared clock by a stage latency
        :param latency: int nanoseconds
        :return: None
        """
        if self.clock is not None and latency:
            self.clock.advance_time(latency)

    @abstractmethod
    def get_stats(self):
       return dict()

    @abstractmethod
    def access(self, operation, address, line):
        raise NotImplementedError("This method should be overridden by subclasses")
