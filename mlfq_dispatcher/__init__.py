"""Process control blocks, job list tools and a signal-reporting worker process."""

__version__ = "0.1.0"