"""Read and tune Linux kernel settings and system information from /proc."""

__version__ = "0.1.0"