"""Command line interface for addrscope."""
