"""Register-level models of OMAP system-on-chip peripherals."""

__version__ = "0.1.0"