import logging

logger = logging.getLogger(__name__)


def hex_to_int(hex_string):
    return int(hex_string, 16)

class TraceParser:
    """
    Parses a trace file and yields operation and address pairs
    """
    def __init__(self, trace_file, addr_bits=32):
        self.addr_bits = addr_bits
        self.trace_file = trace_file
        with open(trace_file, 'r') as f:
            self.lines = f.readlines()
        self._mask = (1 << self.addr_bits) - 1

    def __iter__(self):
        # iterate over each line and yield relevant info
        for line in self.lines:
            parts = line.split(":")
            if len(parts) < 2:
                continue
            operation = parts[0].strip().upper()
            hex_string = parts[1].strip()
            if not operation or not hex_string:
                continue
            try:
                addr_int = hex_to_int(hex_string) & self._mask
            except ValueError:
                logger.warning("skipping trace line with malformed address: %r", line.strip())
                continue
            yield operation, addr_int, hex_string
