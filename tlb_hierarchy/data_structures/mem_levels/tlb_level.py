import logging
from .level_core import MemoryLevel
from ..caches.translation_cache import L1TLB, L2TLB

logger = logging.getLogger(__name__)


class TwoLevelTLB(MemoryLevel):
    """
    Two level translation lookaside buffer.

    Lookups go L1 -> L2 -> page table. Dirty bits are set by write hits in L1 and move down one level
    on eviction: a dirty L1 victim is absorbed by L2, and a dirty L2 victim is written back to the
    backing store. L2 entries are clean after every translation that touches them.
    """
    def __init__(self, config, clock, page_table, backing_store, invalidation_bus=None):
        super().__init__("TLB", lower_level=page_table, clock=clock)
        self.page_table = page_table
        self.backing_store = backing_store
        self.l1_latency = config.l1.latency
        self.l2_latency = config.l2.latency

        self.page_offset_bits = config.bits.page_offset_bits
        self.vpn_bits = config.bits.vpn_bits
        # precompute masks
        self._virt_mask = (1 << config.bits.address_bits) - 1
        self._vpn_mask = (1 << self.vpn_bits) - 1
        self._offset_mask = (1 << self.page_offset_bits) - 1

        self.l1 = L1TLB(config, clock, writeback=self._writeback_l1_to_l2)
        self.l2 = L2TLB(config, clock, writeback=self._writeback_l2_to_memory)
        if invalidation_bus:
            invalidation_bus.register_listener(self)
        self.init()

    def init(self):
        """
        Empty both levels and zero every counter
        :return: None
        """
        self.l1.reset()
        self.l2.reset()
        logger.info("TLB reset: L1=%d entries, L2=%d entries", self.l1.num_entries, self.l2.num_entries)

    # read-only counters
    @property
    def l1_hits(self):
        return self.l1.hits

    @property
    def l1_misses(self):
        return self.l1.misses

    @property
    def l1_invalidations(self):
        return self.l1.invalidations

    @property
    def l2_hits(self):
        return self.l2.hits

    @property
    def l2_misses(self):
        return self.l2.misses

    @property
    def l2_invalidations(self):
        return self.l2.invalidations

    def parse_address(self, virtual_address):
        """
        Split a virtual address into its vpn and page offset
        :param virtual_address: int
        :return: vpn, offset
        """
        virtual_address &= self._virt_mask
        vpn = (virtual_address >> self.page_offset_bits) & self._vpn_mask
        offset = virtual_address & self._offset_mask
        return vpn, offset

    def page_base(self, ppn):
        return ppn << self.page_offset_bits

    def _writeback_l1_to_l2(self, vpn, ppn):
        # L2 already has the page: it takes over the dirty bit, ppn is assumed to match
        slot = self.l2.find(vpn)
        if slot is not None:
            self.l2.touch(slot).mark_dirty()
            logger.debug("L1 victim vpn=%#x absorbed by resident L2 entry", vpn)
            return
        self.l2.insert(True, vpn, ppn)

    def _writeback_l2_to_memory(self, vpn, ppn):
        self.backing_store.writeback(self.page_base(ppn))

    @staticmethod
    def _update_line(line, **columns):
        if line is None:
            return
        for column, value in columns.items():
            setattr(line, column, value)

    def translate(self, virtual_address, operation, line=None):
        """
        Translate a virtual address to a physical address
        :param virtual_address: int
        :param operation: string "R" or "W"
        :param line: optional AccessLine to record the per-level results on
        :return: int physical address
        """
        if operation not in ("R", "W"):
            raise ValueError(f"Unknown op: {operation}")
        is_write = operation == "W"

        self.charge(self.l1_latency)
        virtual_address &= self._virt_mask
        vpn, offset = self.parse_address(virtual_address)
        self._update_line(line, vpn=vpn, page_offset=offset)

        # L1 hit
        slot = self.l1.find(vpn)
        if slot is not None:
            self.l1.hits += 1
            entry = self.l1.touch(slot)
            if is_write:
                entry.mark_dirty()
            physical_address = self.page_base(entry.ppn) | offset
            self._update_line(line, l1_result=True, ppn=entry.ppn, physical_address=physical_address)
            return physical_address

        self.l1.misses += 1
        self.charge(self.l2_latency)

        # L2 hit, promote into L1 and leave the L2 copy clean
        slot = self.l2.find(vpn)
        if slot is not None:
            self.l2.hits += 1
            entry = self.l2.touch(slot)
            entry.dirty = False
            ppn = entry.ppn
            physical_address = self.page_base(ppn) | offset
            self.l1.insert(is_write, vpn, ppn)
            self._update_line(line, l1_result=False, l2_result=True, ppn=ppn, physical_address=physical_address)
            return physical_address

        # miss in both levels, walk the page table
        self.l2.misses += 1
        self._update_line(line, l1_result=False, l2_result=False)
        physical_address = self.page_table.resolve_miss(virtual_address, operation)
        ppn = physical_address >> self.page_offset_bits
        self.l2.insert(False, vpn, ppn)
        self.l1.insert(is_write, vpn, ppn)
        self._update_line(line, ppn=ppn, physical_address=physical_address)
        return physical_address

    def invalidate(self, virtual_page_number):
        """
        Drop a vpn from both levels. A dirty L1 copy is written back first, an L2 copy is simply
        dropped. Absent vpns are ignored.
        :param virtual_page_number: int
        :return: None
        """
        vpn = virtual_page_number & self._vpn_mask

        self.charge(self.l1_latency)
        slot = self.l1.find(vpn)
        if slot is not None:
            entry = self.l1.slots[slot]
            if entry.dirty:
                self.backing_store.writeback(self.page_base(entry.ppn))
            self.l1.invalidate_slot(slot)

        self.charge(self.l2_latency)
        slot = self.l2.find(vpn)
        if slot is not None:
            self.l2.invalidate_slot(slot)

    def on_page_evicted(self, evicted_entry):
        logger.debug("shootdown of vpn=%#x after page eviction", evicted_entry.vpn)
        self.invalidate(evicted_entry.vpn)

    def access(self, operation, address, line):
        return self.translate(address, operation, line)

    def get_stats(self):
        return {"l1": self.l1.get_stats(), "l2": self.l2.get_stats()}
