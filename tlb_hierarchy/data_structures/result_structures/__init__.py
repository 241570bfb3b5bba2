from .access_results import AccessLine

__all__ = ["AccessLine"]
