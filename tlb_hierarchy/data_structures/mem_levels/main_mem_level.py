import logging
from .level_core import MemoryLevel

logger = logging.getLogger(__name__)


class MainMemoryLevel(MemoryLevel):
    """
    Bottom of the hierarchy. Serves translated data accesses and absorbs page write-backs from the TLB.
    """
    def __init__(self, clock=None, latency=0):
        super().__init__("Main Memory", clock=clock)
        self.latency = latency
        self.reads = 0
        self.writes = 0
        self.writebacks = 0

    def access(self, operation, address, line=None):
        if operation == "R":
            self.reads += 1
        elif operation == "W":
            self.writes += 1
        else:
            raise ValueError(f"Unknown op: {operation}")
        self.charge(self.latency)
        return address

    def writeback(self, physical_page_base):
        """
        Accept a dirty page flushed out of the TLB
        :param physical_page_base: int, ppn shifted past the page offset
        :return: None
        """
        self.writebacks += 1
        logger.debug("write-back of page base %#x", physical_page_base)
        self.charge(self.latency)

    def get_stats(self):
        total = self.reads + self.writes
        return {
            "mem_accesses": total,
            "mem_reads": self.reads,
            "mem_writes": self.writes,
            "tlb_writebacks": self.writebacks,
        }
