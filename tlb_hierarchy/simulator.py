import logging
from trace_parser import TraceParser
from tlb_hierarchy.clock import SimClock
from tlb_hierarchy.data_structures.mem_levels.main_mem_level import MainMemoryLevel
from tlb_hierarchy.data_structures.mem_levels.tlb_level import TwoLevelTLB
from tlb_hierarchy.data_structures.mem_levels.virtual_memory_level import VirtualMemoryLevel
from tlb_hierarchy.data_structures.virtual_mem.page_table import PageTable
from tlb_hierarchy.data_structures.result_structures.access_results import AccessLine
from tlb_hierarchy.protocols.invalidation_bus import InvalidationBus

logger = logging.getLogger(__name__)


class TLBSimulator:
    """Simulates address translation through a two level TLB based on the provided configuration."""
    def __init__(self, config):
        self.config = config
        self.bits = self.config.bits
        self.clock = SimClock()
        self.memory = MainMemoryLevel(self.clock, latency=config.mem.latency)
        invalidation_bus = InvalidationBus()
        self.invalidation_bus = invalidation_bus
        self.pt = PageTable(config, self.clock)
        self.tlb = TwoLevelTLB(config, self.clock, self.pt, self.memory, invalidation_bus=invalidation_bus)
        self.top_level = VirtualMemoryLevel(self.tlb, self.pt, invalidation_bus, lower_level=self.memory,
                                            clock=self.clock)

        self.reads = 0
        self.writes = 0
        self.invalidations = 0

    def access(self, operation, address):
        """
        Run one access through the hierarchy
        :param operation: string "R", "W" or "I"
        :param address: int virtual address
        :return: AccessLine describing the access
        """
        if operation == "R":
            self.reads += 1
        elif operation == "W":
            self.writes += 1
        elif operation == "I":
            self.invalidations += 1
        else:
            raise ValueError(f"Unknown op: {operation}")
        # have line get passed through the hierarchy to collect info
        line = AccessLine(address, operation)
        self.top_level.access(operation, address, line)
        return line

    def protect(self, vpn):
        """
        Write-protect a page and shoot down any cached translation for it
        :param vpn: int
        :return: None
        """
        self.pt.protect(vpn)
        for evicted_entry in self.pt.drain_evictions():
            self.invalidation_bus.publish_page_evicted(evicted_entry)

    def simulate(self, trace, verbose=True):
        """
        Core simulator functionality, simulates the translation hierarchy using the provided trace file.
        :param trace: trace file path
        :param verbose: bool, print a row per access
        :return: None
        """
        if verbose:
            print(AccessLine.HEADER)
        for operation, int_address, hex_address in TraceParser(trace, addr_bits=self.config.address_bits):
            logger.debug("trace record %s:%s", operation, hex_address)
            line = self.access(operation, int_address)
            if verbose:
                print(line)
        print("\nSimulation statistics\n")
        self.pprint_stats()

    def get_stats(self):
        """
        Gathers and returns stats from all levels of the hierarchy.
        :return: dict of stats
        """
        stats = dict()
        tlb_stats = self.tlb.get_stats()
        stats["l1 tlb"] = tlb_stats["l1"]
        stats["l2 tlb"] = tlb_stats["l2"]
        stats["page table"] = self.pt.get_stats()
        stats["reads"] = self.reads
        stats["writes"] = self.writes
        stats["invalidations"] = self.invalidations
        stats["read ratio"] = self.reads / (self.reads + self.writes) if (self.reads + self.writes) > 0 else 0
        stats["main memory"] = self.memory.get_stats()
        stats["elapsed ns"] = self.clock.current_time()
        return stats

    def pprint_stats(self):
        """
        Pretty prints the stats from all levels of the hierarchy.
        :return: None
        """
        stats = self.get_stats()
        stat_str = ""
        for label, key in (("L1 tlb", "l1 tlb"), ("L2 tlb", "l2 tlb")):
            level_stats = stats[key]
            stat_str += f"{label} hits        : " + str(level_stats['hits']) + "\n"
            stat_str += f"{label} misses      : " + str(level_stats['misses']) + "\n"
            stat_str += f"{label} invalidations: " + str(level_stats['invalidations']) + "\n"
            stat_str += f"{label} dirty entries: " + str(level_stats['dirty entries']) + "\n"
            stat_str += f"{label} hit rate    : " + f"{level_stats['hit rate']:.6f}" + "\n\n"
        pt_stats = stats['page table']
        stat_str += "pt hits             : " + str(pt_stats['hits']) + "\n"
        stat_str += "pt misses           : " + str(pt_stats['misses']) + "\n"
        stat_str += "pt hit rate         : " + f"{pt_stats['hit rate']:.6f}" + "\n\n"
        stat_str += "Total reads         : " + str(stats['reads']) + "\n"
        stat_str += "Total writes        : " + str(stats['writes']) + "\n"
        stat_str += "Total invalidations : " + str(stats['invalidations']) + "\n"
        stat_str += "Ratio of reads      : " + f"{stats['read ratio']:.6f}" + "\n\n"
        stat_str += "main memory refs    : " + str(stats['main memory']['mem_accesses']) + "\n"
        stat_str += "tlb write-backs     : " + str(stats['main memory']['tlb_writebacks']) + "\n"
        stat_str += "page table refs     : " + str(pt_stats['accesses']) + "\n"
        stat_str += "disk refs           : " + str(pt_stats['disk refs']) + "\n"
        stat_str += "disk writes         : " + str(pt_stats['disk writes']) + "\n"
        stat_str += "elapsed time (ns)   : " + str(stats['elapsed ns']) + "\n"
        print(stat_str)
