from config import Config, TLBLevelConfig, PageTableConfig, MemoryConfig
from tlb_hierarchy.clock import SimClock
from tlb_hierarchy.data_structures.mem_levels.tlb_level import TwoLevelTLB
from tlb_hierarchy.exceptions import ProtectionFault

PAGE_BITS = 8
L1_LATENCY = 1
L2_LATENCY = 10
WALK_LATENCY = 100


def make_config(l1_entries=2, l2_entries=2, n_virtual_pages=64, n_physical_pages=16, page_size=256,
                walk_latency=WALK_LATENCY, disk_latency=0, mem_latency=0):
    return Config(
        TLBLevelConfig(l1_entries, L1_LATENCY),
        TLBLevelConfig(l2_entries, L2_LATENCY),
        PageTableConfig(n_virtual_pages, n_physical_pages, page_size, walk_latency, disk_latency),
        MemoryConfig(mem_latency),
    )


def ppn_for(vpn):
    return vpn + 0x20


class RecordingSink:
    """Backing store that remembers every page base written back to it."""
    def __init__(self):
        self.writebacks = []

    def writeback(self, physical_page_base):
        self.writebacks.append(physical_page_base)


class ScriptedPageTable:
    """Maps vpn -> vpn + 0x20, charges a fixed walk latency and records its calls."""
    def __init__(self, clock, latency=WALK_LATENCY):
        self.clock = clock
        self.latency = latency
        self.calls = []
        self.call_times = []
        self.protected = set()
        self.low_flags = 0

    def resolve_miss(self, virtual_address, operation):
        vpn = virtual_address >> PAGE_BITS
        if operation == "W" and vpn in self.protected:
            raise ProtectionFault(f"Write to protected page {vpn:#x}", virtual_address, operation)
        self.calls.append((virtual_address, operation))
        self.call_times.append(self.clock.current_time())
        self.clock.advance_time(self.latency)
        offset = virtual_address & ((1 << PAGE_BITS) - 1)
        return (ppn_for(vpn) << PAGE_BITS) | offset | self.low_flags


def make_tlb(l1_entries=2, l2_entries=2):
    config = make_config(l1_entries, l2_entries)
    clock = SimClock()
    page_table = ScriptedPageTable(clock)
    sink = RecordingSink()
    tlb = TwoLevelTLB(config, clock, page_table, sink)
    return tlb, clock, page_table, sink


def va(vpn, offset=0):
    return (vpn << PAGE_BITS) | offset


def entry(level, vpn):
    slot = level.find(vpn)
    return None if slot is None else level.slots[slot]
