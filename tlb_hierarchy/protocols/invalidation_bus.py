import logging

logger = logging.getLogger(__name__)


class InvalidationBus:
    """
    A simple invalidation bus to notify listeners about page evictions
    """
    def __init__(self):
        self.listeners = []
        self.published = 0

    def register_listener(self, listener):
        """
        Register a listener to the invalidation bus
        :param listener: memory level
        :return: None
        """
        if listener not in self.listeners:
            self.listeners.append(listener)

    def publish_page_evicted(self, evicted_entry):
        """
        Handles each listener's on_page_evicted method if it exists
        :param evicted_entry: EvictedPageTableEntry
        :return: None
        """
        self.published += 1
        logger.debug("publishing eviction of vpn=%#x to %d listeners", evicted_entry.vpn, len(self.listeners))
        for listener in self.listeners:
            on_page_evicted = getattr(listener, "on_page_evicted", None)
            if on_page_evicted:
                on_page_evicted(evicted_entry)
