import math

def is_power_of_two(n):
    """Check if a number is a power of two. uses bit operations."""
    return n > 0 and (n & (n - 1)) == 0

def safe_log_2(n):
    """Compute the base-2 logarithm of a number, ensuring the number is a power of two."""
    if not is_power_of_two(n):
        raise ValueError("Input must be a power of two.")
    return int(math.log2(n))

def safe_int(value, key):
    """Parse an integer config value, naming the key on failure."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Config value for '{key}' must be an integer, got {value!r}.")


class BitCounts:
    def __init__(self):
        # initialize them all to zero to start
        self.vpn_bits = 0
        self.page_offset_bits = 0
        self.ppn_bits = 0
        # virtual address width
        self.address_bits = 0
        self.physical_bits = 0

class TLBLevelConfig:
    def __init__(self, num_entries, latency):
        self.num_entries = num_entries
        self.latency = latency

class PageTableConfig:
    def __init__(self, n_virtual_pages, n_physical_pages, page_size, walk_latency=0, disk_latency=0):
        self.n_virtual_pages = n_virtual_pages
        self.n_physical_pages = n_physical_pages
        self.page_size = page_size
        self.walk_latency = walk_latency
        self.disk_latency = disk_latency

class MemoryConfig:
    def __init__(self, latency=0):
        self.latency = latency

class Config:
    def __init__(self, l1_cfg, l2_cfg, pt_cfg, mem_cfg=None):
        self.l1 = l1_cfg
        self.l2 = l2_cfg
        self.pt = pt_cfg
        self.mem = mem_cfg if mem_cfg is not None else MemoryConfig()
        self.bits = BitCounts()
        self.validate()
        self.derive_bits()

    @property
    def address_bits(self):
        return self.bits.address_bits

    @classmethod
    def from_config_file(cls, filepath):
        # parse out config info
        with open(filepath) as infile:
            raw_lines = [ln.rstrip("\n") for ln in infile]

        # Section names exactly as in the file
        section_headers = {
            "L1 TLB configuration": "l1",
            "L2 TLB configuration": "l2",
            "Page Table configuration": "pt",
            "Main Memory configuration": "mem",
        }

        # Buckets for per-section key/values
        sections = {
            "l1": {},
            "l2": {},
            "pt": {},
            "mem": {},
        }

        current = None
        for ln in raw_lines:
            line = ln.strip()
            if not line or line.startswith("#"):
                continue

            # Enter a new section?
            if line in section_headers:
                current = section_headers[line]
                continue

            # Regular "Key: value" inside a section
            if ":" in line and current is not None:
                key, val = line.split(":", 1)
                sections[current][key.strip()] = val.strip()
                continue

            raise ValueError(f"Unrecognized config line: {line!r}")

        def get(section, key, default):
            return safe_int(sections[section].get(key, default), key)

        # TLB config info
        l1_cfg = TLBLevelConfig(get("l1", "Number of entries", 16), get("l1", "Access latency", 1))
        l2_cfg = TLBLevelConfig(get("l2", "Number of entries", 64), get("l2", "Access latency", 4))

        # Page table config info
        pt_cfg = PageTableConfig(
            n_virtual_pages=get("pt", "Number of virtual pages", 64),
            n_physical_pages=get("pt", "Number of physical pages", 16),
            page_size=get("pt", "Page size", 4096),
            walk_latency=get("pt", "Walk latency", 100),
            disk_latency=get("pt", "Disk latency", 5000),
        )

        # Main memory config info
        mem_cfg = MemoryConfig(get("mem", "Access latency", 100))

        # make config class, validate it, and derive bit info
        return cls(l1_cfg, l2_cfg, pt_cfg, mem_cfg)

    def _validate_tlb(self):
        # fully associative, so only the entry count matters
        if self.l1.num_entries < 1 or self.l1.num_entries > 64:
            raise ValueError("L1 TLB number of entries must be between 1 and 64.")
        if self.l2.num_entries < 1 or self.l2.num_entries > 1024:
            raise ValueError("L2 TLB number of entries must be between 1 and 1024.")
        if self.l2.num_entries < self.l1.num_entries:
            raise ValueError("L2 TLB must have at least as many entries as the L1 TLB.")
        if self.l1.latency < 0 or self.l2.latency < 0:
            raise ValueError("TLB latencies must be non-negative.")

    def _validate_pt(self):
        # max number of virtual pages is 2^20
        if self.pt.n_virtual_pages < 1 or self.pt.n_virtual_pages > 2**20:
            raise ValueError("Number of virtual pages must be between 1 and 2^20.")
        # max number of physical pages is 2^16
        if self.pt.n_physical_pages < 1 or self.pt.n_physical_pages > 2**16:
            raise ValueError("Number of physical pages must be between 1 and 2^16.")
        # page counts and page size must be powers of two
        if not is_power_of_two(self.pt.n_virtual_pages):
            raise ValueError("Number of virtual pages must be a power of two.")
        if not is_power_of_two(self.pt.n_physical_pages):
            raise ValueError("Number of physical pages must be a power of two.")
        if not is_power_of_two(self.pt.page_size):
            raise ValueError("Page size must be a power of two.")
        # max reference address length is 32 bits
        if (self.pt.n_virtual_pages * self.pt.page_size) > 2**32:
            raise ValueError("Maximum virtual address space exceeded (2^32).")
        if self.pt.walk_latency < 0 or self.pt.disk_latency < 0:
            raise ValueError("Page table latencies must be non-negative.")

    def _validate_mem(self):
        if self.mem.latency < 0:
            raise ValueError("Main memory latency must be non-negative.")

    def validate(self):
        self._validate_tlb()
        self._validate_pt()
        self._validate_mem()

    def derive_bits(self):
        # virtual memory bits
        self.bits.page_offset_bits = safe_log_2(self.pt.page_size)
        self.bits.vpn_bits = safe_log_2(self.pt.n_virtual_pages)
        self.bits.ppn_bits = safe_log_2(self.pt.n_physical_pages)
        self.bits.address_bits = self.bits.vpn_bits + self.bits.page_offset_bits
        self.bits.physical_bits = self.bits.ppn_bits + self.bits.page_offset_bits

    def __str__(self):
        print_str = ""
        print_str += f"L1 TLB contains {self.l1.num_entries} entries (fully associative).\n"
        print_str += f"L1 TLB access latency is {self.l1.latency} ns.\n\n"
        print_str += f"L2 TLB contains {self.l2.num_entries} entries (fully associative).\n"
        print_str += f"L2 TLB access latency is {self.l2.latency} ns.\n\n"
        print_str += f"Number of virtual pages is {self.pt.n_virtual_pages}.\n"
        print_str += f"Number of physical pages is {self.pt.n_physical_pages}.\n"
        print_str += f"Each page contains {self.pt.page_size} bytes.\n"
        print_str += f"Number of bits used for the page table index is {self.bits.vpn_bits}.\n"
        print_str += f"Number of bits used for the page offset is {self.bits.page_offset_bits}.\n"
        print_str += f"Virtual addresses are {self.bits.address_bits} bits wide.\n"
        print_str += f"Page table walk latency is {self.pt.walk_latency} ns, disk latency is {self.pt.disk_latency} ns.\n\n"
        print_str += f"Main memory access latency is {self.mem.latency} ns.\n"
        return print_str
