"""addrscope - turn IPs, CIDR blocks, hostnames and target files into a scan list."""

__version__ = "0.1.0"
