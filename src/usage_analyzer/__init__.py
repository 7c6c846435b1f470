"""
SQL Table Usage Analyzer Package

This package scans directories of SQL scripts and reports which SELECT scripts
read the tables written by which INSERT scripts.
"""

__version__ = "0.1.0"

from .usage import SQLUsageAnalyzer, FileAnalysis, TableUsage, UsageReport

__all__ = ['SQLUsageAnalyzer', 'FileAnalysis', 'TableUsage', 'UsageReport', '__version__']
