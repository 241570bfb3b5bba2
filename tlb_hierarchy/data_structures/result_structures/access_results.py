
class AccessLine:
    """
    Class to encapsulate all the info about a single memory access for logging purposes
    """
    HEADER = ("Virtual  Virt.  Page L1   L2   PT   Phys Physical Elapsed\n"
              "Address  Page # Off  Res. Res. Res. Pg # Address  Time (ns)\n"
              "-------- ------ ---- ---- ---- ---- ---- -------- ----------")

    def __init__(self, address, operation="R"):
        # format address as int regardless of if its an int or string
        if isinstance(address, str):
            self.address = int(address, 16)
        else:
            self.address = int(address) & 0xFFFFFFFF
        self.operation = operation
        self.vpn = None
        self.page_offset = None
        self.l1_result = None
        self.l2_result = None
        self.page_table_result = None
        self.ppn = None
        self.physical_address = None
        self.time = None

    @staticmethod
    def _format_numeric(value, width, zero_pad=False):
        """
        Helper to format numeric values as hex strings, with options for width and zero-padding
        :param value: int or None
        :param width: int
        :param zero_pad: bool
        :return: formatted string
        """
        if value is None:
            return " " * width
        if zero_pad:
            return f"{value:0{width}x}"
        return f"{value:>{width}x}"

    @staticmethod
    def _format_hit_miss(value, width):
        """
        Helper to format hit/miss values as 'hit' or 'miss', or spaces if None
        :param value: bool or None
        :param width: int
        :return: formatted string
        """
        return (" " * width) if value is None else f"{'hit' if value else 'miss':>{width}s}"

    def __str__(self):
        # address is always printed as 8-hex, zero-padded
        addr = self._format_numeric(self.address, 8, zero_pad=True)

        vpn = self._format_numeric(self.vpn, 6)
        page_off = self._format_numeric(self.page_offset, 4)
        l1_res = self._format_hit_miss(self.l1_result, 4)
        l2_res = self._format_hit_miss(self.l2_result, 4)
        pt_res = self._format_hit_miss(self.page_table_result, 4)
        ppn = self._format_numeric(self.ppn, 4)
        phys = self._format_numeric(self.physical_address, 8, zero_pad=True)
        time = " " * 10 if self.time is None else f"{self.time:>10d}"

        if self.operation == "I":
            # invalidations only resolve the page number
            return " ".join([addr, vpn, " " * 4, "inv.", " " * 4, " " * 4, " " * 4, " " * 8, time])

        return " ".join([
            addr, vpn, page_off,
            l1_res, l2_res, pt_res, ppn,
            phys, time
        ])
