"""ccasync: domain core for customer, utility-account and LDC sync."""

__version__ = "0.1.0"
