from .level_core import MemoryLevel

class VirtualMemoryLevel(MemoryLevel):
    """
    Front of the hierarchy: translates through the TLB, broadcasts page evictions, then forwards the
    physical access to the lower level.
    """
    def __init__(self, tlb, page_table, invalidation_bus, lower_level=None, clock=None):
        super().__init__("Virtual Memory", lower_level, clock=clock)
        self.tlb = tlb
        self.page_table = page_table
        self.invalidation_bus = invalidation_bus

    @staticmethod
    def update_line(translation_result, line):
        line.page_table_result = translation_result.hit
        line.ppn = translation_result.ppn

    def _publish_evictions(self):
        for evicted_entry in self.page_table.drain_evictions():
            self.invalidation_bus.publish_page_evicted(evicted_entry)

    def _stamp(self, line):
        if self.clock is not None:
            line.time = self.clock.current_time()

    def invalidate(self, address, line):
        vpn, _ = self.tlb.parse_address(address)
        line.vpn = vpn
        self.tlb.invalidate(vpn)
        self._stamp(line)

    def access(self, operation, address, line):
        if operation == "I":
            return self.invalidate(address, line)
        physical_address = self.tlb.translate(address, operation, line)
        # the page table was only consulted if both TLB levels missed
        if line.l2_result is False and self.page_table.last_result is not None:
            self.update_line(self.page_table.last_result, line)
        if operation == "W":
            self.page_table.mark_dirty(line.ppn)
        self._publish_evictions()
        if self.lower_level:
            self.lower_level.access(operation, physical_address, line)
        self._stamp(line)
        return physical_address

    def get_stats(self):
        return self.page_table.get_stats()
