from .caches import *
from .mem_levels import *
from .virtual_mem import *
from .result_structures import *

__all__ = ["TranslationEntry", "TranslationCache", "L1TLB", "L2TLB", "MainMemoryLevel", "TwoLevelTLB",
           "VirtualMemoryLevel", "PageTable", "TranslationResult", "EvictedPageTableEntry", "AccessLine"]
