"""
School attendance analytics: off-day aware history buckets, year-to-date
summaries and chronic-absence alerts.
"""

__version__ = "0.1.0"
