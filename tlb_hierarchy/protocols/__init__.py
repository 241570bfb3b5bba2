from .invalidation_bus import InvalidationBus

__all__ = ["InvalidationBus"]
