"""Rules engine and computer opponent for 6×6 and 6×8 chess variants."""

__version__ = "0.1.0"
