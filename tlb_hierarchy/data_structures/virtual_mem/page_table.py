import logging
from collections import OrderedDict
from tlb_hierarchy.exceptions import ProtectionFault

logger = logging.getLogger(__name__)


class EvictedPageTableEntry:
    """
    Represents an evicted page table entry
    """
    def __init__(self, ppn, vpn):
        self.ppn = ppn
        self.vpn = vpn

class TranslationResult:
    """
    Represents the result of a page table translation
    """
    def __init__(self, hit, vpn, ppn, physical_address, evicted_entry=None):
        self.hit = hit
        self.vpn = vpn
        self.ppn = ppn
        self.physical_address = physical_address
        self.evicted_entry = evicted_entry

class PageTable:
    """
    Demand paged page table with LRU eviction of physical pages
    """
    def __init__(self, config, clock):
        # page table config
        self.clock = clock
        self.n_virtual_pages = config.pt.n_virtual_pages
        self.n_physical_pages = config.pt.n_physical_pages
        self.page_size = config.pt.page_size
        self.walk_latency = config.pt.walk_latency
        self.disk_latency = config.pt.disk_latency
        self.vpn_bits = config.bits.vpn_bits
        self.ppn_bits = config.bits.ppn_bits
        self.page_offset_bits = config.bits.page_offset_bits
        self.virt_bits = self.vpn_bits + self.page_offset_bits
        self.phys_bits = self.ppn_bits + self.page_offset_bits

        # masks
        self._offset_mask = (1 << self.page_offset_bits) - 1
        self._vpn_mask = (1 << self.vpn_bits) - 1
        self._ppn_mask = (1 << self.ppn_bits) - 1
        self._virt_mask = (1 << self.virt_bits) - 1
        self._phys_mask = (1 << self.phys_bits) - 1

        # page table state
        self.vpn_to_ppn = {}
        self.ppn_to_vpn = {}
        self.free_ppns = [elem for elem in range(self.n_physical_pages)]
        # ppn -> None, oldest first
        self.lru_ppns = OrderedDict()
        self.dirty_ppns = set()
        self.protected_vpns = set()
        self.pending_evictions = []
        self.last_result = None

        # stats for tracking
        self.hits = 0
        self.misses = 0
        self.accesses = 0
        self.disk_references = 0
        self.disk_writes = 0

    def _touch_ppn_mru(self, ppn):
        """
        Mark a ppn as most recently used
        :param ppn: int, the ppn to mark as most recently used
        :return: None
        """
        self.lru_ppns.pop(ppn, None)
        self.lru_ppns[ppn] = None

    def _allocate_ppn(self):
        """
        Allocate a PPN, evicting if necessary
        :return: ppn, EvictedPageTableEntry or None
        """
        # if there are free ppns, use one of those
        if self.free_ppns:
            return self.free_ppns.pop(0), None
        # if no free ppns, lru eviction. allocated ppn is the lru ppn
        victim_ppn, _ = self.lru_ppns.popitem(last=False)
        victim_vpn = self.ppn_to_vpn.pop(victim_ppn)
        del self.vpn_to_ppn[victim_vpn]
        dirty = victim_ppn in self.dirty_ppns
        if dirty:
            # modified page goes back to disk before the frame is reused
            self.dirty_ppns.discard(victim_ppn)
            self.disk_writes += 1
        logger.debug("page eviction: vpn=%#x ppn=%#x dirty=%s", victim_vpn, victim_ppn, dirty)
        return victim_ppn, EvictedPageTableEntry(victim_ppn, victim_vpn)

    def parse_address(self, address):
        """
        Parse an address into its page offset and vpn components
        :param address: int, the address to parse
        :return: int, int; the page offset and vpn
        """
        address = address & self._virt_mask
        offset = address & self._offset_mask
        vpn = (address >> self.page_offset_bits) & self._vpn_mask
        return offset, vpn

    def build_physical_address(self, ppn, offset):
        """
        Build a physical address from a ppn and offset
        :param ppn: int, the ppn
        :param offset: int, the page offset
        :return: int, the physical address
        """
        return ((ppn & self._ppn_mask) << self.page_offset_bits | (offset & self._offset_mask)) & self._phys_mask

    def translate(self, virtual_address):
        """
        Translate a virtual address to a physical address, faulting the page in if needed
        :param virtual_address: int, the virtual address to translate
        :return: TranslationResult
        """
        self.accesses += 1
        self.clock.advance_time(self.walk_latency)
        page_offset, vpn = self.parse_address(virtual_address)
        ppn = self.vpn_to_ppn.get(vpn, None)
        # pt hit
        if ppn is not None:
            self.hits += 1
            # use existing translation and update lru
            self._touch_ppn_mru(ppn)
            physical_address = self.build_physical_address(ppn, page_offset)
            self.last_result = TranslationResult(True, vpn, ppn, physical_address)
            return self.last_result
        # pt miss
        self.misses += 1
        self.disk_references += 1
        self.clock.advance_time(self.disk_latency)
        # allocate a new ppn, possibly evict lru ppn, evicted ppn is the new ppn to allocate
        ppn, evicted_entry = self._allocate_ppn()
        self.vpn_to_ppn[vpn] = ppn
        self.ppn_to_vpn[ppn] = vpn
        self._touch_ppn_mru(ppn)
        if evicted_entry:
            self.pending_evictions.append(evicted_entry)
        physical_address = self.build_physical_address(ppn, page_offset)
        self.last_result = TranslationResult(False, vpn, ppn, physical_address, evicted_entry=evicted_entry)
        return self.last_result

    def resolve_miss(self, virtual_address, operation):
        """
        Resolve a translation that missed both TLB levels
        :param virtual_address: int
        :param operation: string "R" or "W"
        :return: int physical address
        """
        _, vpn = self.parse_address(virtual_address)
        if operation == "W" and vpn in self.protected_vpns:
            raise ProtectionFault(f"Write to protected page {vpn:#x}", virtual_address=virtual_address,
                                  operation=operation)
        result = self.translate(virtual_address)
        if operation == "W":
            self.mark_dirty(result.ppn)
        return result.physical_address

    def mark_dirty(self, ppn):
        """
        Record a store to a resident frame, it costs a disk write when the frame is evicted.
        Writes that hit in the TLB never reach resolve_miss, so they are reported here as well.
        :param ppn: int
        :return: None
        """
        if ppn in self.ppn_to_vpn:
            self.dirty_ppns.add(ppn)

    def protect(self, vpn):
        """
        Make a page read-only. Mapped pages are reported through drain_evictions so cached
        translations can be shot down.
        :param vpn: int
        :return: None
        """
        vpn &= self._vpn_mask
        self.protected_vpns.add(vpn)
        ppn = self.vpn_to_ppn.get(vpn)
        if ppn is not None:
            self.pending_evictions.append(EvictedPageTableEntry(ppn, vpn))

    def unprotect(self, vpn):
        self.protected_vpns.discard(vpn & self._vpn_mask)

    def drain_evictions(self):
        """
        Hand over the evictions recorded since the last call
        :return: list of EvictedPageTableEntry
        """
        evictions, self.pending_evictions = self.pending_evictions, []
        return evictions

    def get_stats(self):
        """
        Get page table stats
        :return: dict of stats
        """
        stats = {
            "accesses": self.accesses,
            "hits": self.hits,
            "misses": self.misses,
            "hit rate": self.hits / self.accesses if self.accesses > 0 else 0,
            "disk refs": self.disk_references,
            "disk writes": self.disk_writes,
        }
        return stats
