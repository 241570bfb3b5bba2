class TranslationFault(Exception):
    """
    Raised by the page table when a virtual address cannot be resolved
    """
    def __init__(self, message, virtual_address=None, operation=None):
        super().__init__(message)
        self.virtual_address = virtual_address
        self.operation = operation


class ProtectionFault(TranslationFault):
    """
    Raised on a write to a write-protected page
    """
