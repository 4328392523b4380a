"""
perfsheet: turn browser performance captures into spreadsheet reports.

Reads HAR network logs and Lighthouse audit reports, normalizes them into
report models with baseline statistics, and renders them as workbooks.
"""

__version__ = "0.1.0"
