"""
shopmerge: aggregates shop listings from SAS OnlineShopping and Trumf Netthandel.
"""

__version__ = "0.1.0"
