from .clock import SimClock
from .exceptions import TranslationFault, ProtectionFault
from .simulator import TLBSimulator

__all__ = ["SimClock", "TranslationFault", "ProtectionFault", "TLBSimulator"]
