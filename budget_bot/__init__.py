"""
Budget Bot - Source Package

A chat assistant that records expenses into a monthly Google Sheets
budget template and reports what is left to spend today.

DESIGN PRINCIPLES:
1. The spreadsheet is the database
2. Every write appends, nothing is rewritten
3. Every failure produces a reply
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Budget Bot Team"
