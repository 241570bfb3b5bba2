import logging

logger = logging.getLogger(__name__)


class TranslationEntry:
    """
    Represents a single slot in a TLB level.
    """
    def __init__(self):
        self.valid = False
        self.dirty = False
        self.last_access = 0
        self.vpn = 0
        self.ppn = 0

    def reset(self):
        """
        Returns the slot to the empty state it has after init.
        :return: None
        """
        self.valid = False
        self.dirty = False
        self.last_access = 0
        self.vpn = 0
        self.ppn = 0

    def mark_dirty(self):
        self.dirty = True


class TranslationCache:
    """
    Fully associative translation cache backed by a fixed pool of slots.
    Slots are found by linear scan and replaced with strict LRU on last_access.
    """
    def __init__(self, name, num_entries, clock, writeback=None):
        if num_entries < 1:
            raise ValueError(f"{name} needs at least one entry, got {num_entries}.")
        self.name = name
        self.num_entries = num_entries
        self.clock = clock
        # called with (vpn, ppn) when a dirty victim is about to be overwritten
        self.writeback = writeback
        self.slots = [TranslationEntry() for _ in range(self.num_entries)]

        # stats
        self.hits = 0
        self.misses = 0
        self.invalidations = 0
        self.evictions = 0
        self.dirty_evictions = 0

    def reset(self):
        """
        Invalidate every slot and zero the stats
        :return: None
        """
        for entry in self.slots:
            entry.reset()
        self.hits = self.misses = self.invalidations = 0
        self.evictions = self.dirty_evictions = 0

    def find(self, vpn):
        """
        Look up the slot holding this vpn
        :param vpn: int
        :return: slot index, or None if no valid entry matches
        """
        for i, entry in enumerate(self.slots):
            if entry.valid and entry.vpn == vpn:
                return i
        return None

    def select_victim(self):
        """
        Pick the slot to fill next. Free slots win, lowest index first; otherwise the valid entry with the
        smallest last_access is chosen (lowest index on ties). A dirty victim is handed to the writeback
        hook before its slot can be reused.
        :return: slot index
        """
        for i, entry in enumerate(self.slots):
            if not entry.valid:
                return i

        victim = 0
        oldest = self.slots[0].last_access
        for i in range(1, self.num_entries):
            if self.slots[i].last_access < oldest:
                oldest = self.slots[i].last_access
                victim = i

        entry = self.slots[victim]
        self.evictions += 1
        logger.debug("%s evict slot %d: vpn=%#x ppn=%#x dirty=%s", self.name, victim, entry.vpn, entry.ppn, entry.dirty)
        if entry.dirty:
            self.dirty_evictions += 1
            if self.writeback is not None:
                self.writeback(entry.vpn, entry.ppn)
        return victim

    def fill(self, slot, dirty, vpn, ppn):
        """
        Populate a slot with a translation stamped with the current time
        :param slot: int slot index
        :param dirty: bool
        :param vpn: int
        :param ppn: int
        :return: the filled TranslationEntry
        """
        entry = self.slots[slot]
        entry.valid = True
        entry.dirty = dirty
        entry.last_access = self.clock.current_time()
        entry.vpn = vpn
        entry.ppn = ppn
        logger.debug("%s fill slot %d: vpn=%#x ppn=%#x dirty=%s", self.name, slot, vpn, ppn, dirty)
        return entry

    def touch(self, slot):
        """
        Refresh the LRU timestamp of a slot
        :param slot: int slot index
        :return: the touched TranslationEntry
        """
        entry = self.slots[slot]
        entry.last_access = self.clock.current_time()
        return entry

    def insert(self, dirty, vpn, ppn):
        """
        select_victim followed by fill
        :return: slot index that now holds the translation
        """
        slot = self.select_victim()
        self.fill(slot, dirty, vpn, ppn)
        return slot

    def invalidate_slot(self, slot):
        entry = self.slots[slot]
        logger.debug("%s invalidate slot %d: vpn=%#x", self.name, slot, entry.vpn)
        entry.valid = False
        entry.dirty = False
        entry.last_access = 0
        self.invalidations += 1

    def iter_valid_entries(self):
        for entry in self.slots:
            if entry.valid:
                yield entry

    def iter_dirty_entries(self):
        """
        Generator to iterate over all dirty entries in the level.
        :return: yields dirty TranslationEntry objects
        """
        for entry in self.slots:
            if entry.valid and entry.dirty:
                yield entry

    def __len__(self):
        return sum(1 for _ in self.iter_valid_entries())

    def get_stats(self):
        """
        Get level stats
        :return: dict of stats
        """
        lookups = self.hits + self.misses
        stats = {"hits": self.hits,
                 "misses": self.misses,
                 "invalidations": self.invalidations,
                 "evictions": self.evictions,
                 "dirty evictions": self.dirty_evictions,
                 "dirty entries": sum(1 for _ in self.iter_dirty_entries()),
                 "hit rate": self.hits / lookups if lookups > 0 else 0}
        return stats


class L1TLB(TranslationCache):
    """ Lightweight wrapper around TranslationCache for the small, fast first level """
    def __init__(self, config, clock, writeback=None):
        super().__init__("L1 TLB", config.l1.num_entries, clock, writeback=writeback)


class L2TLB(TranslationCache):
    """ Lightweight wrapper around TranslationCache for the larger second level """
    def __init__(self, config, clock, writeback=None):
        super().__init__("L2 TLB", config.l2.num_entries, clock, writeback=writeback)
