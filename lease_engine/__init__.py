"""
Lease calculation service: ASC 842 schedules and journal entries
"""

__version__ = "0.1.0"
