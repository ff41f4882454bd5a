"""
slotmatcher - rank employee availability slots against a requested booking time.
"""

__version__ = "1.0.0"
