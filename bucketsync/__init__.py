"""
bucketsync: one-way directory to object-storage synchronization.

Computes which local files are new or changed compared to a bucket
prefix, uploads them, and removes remote objects that no longer
exist locally.
"""

__version__ = "1.0.0"
