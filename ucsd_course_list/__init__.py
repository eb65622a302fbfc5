"""
Crawl the UCSD course catalog into a tab-separated course list.
"""
__version__ = "0.1.0"
