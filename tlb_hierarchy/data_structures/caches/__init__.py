from .translation_cache import TranslationEntry, TranslationCache, L1TLB, L2TLB

__all__ = ['TranslationEntry', 'TranslationCache', 'L1TLB', 'L2TLB']
