from .main_mem_level import MainMemoryLevel
from .tlb_level import TwoLevelTLB
from .virtual_memory_level import VirtualMemoryLevel

__all__ = ["MainMemoryLevel", "TwoLevelTLB", "VirtualMemoryLevel"]
