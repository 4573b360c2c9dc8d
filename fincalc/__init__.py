"""
fincalc - Source Package

A personal finance ledger engine: record income and expense events,
then view rolling summaries and category breakdowns over a look-back
window (day, week, month, year).

DESIGN PRINCIPLES:
1. Validate first, mutate second (every command is all-or-nothing)
2. Money is Decimal, never float
3. Derived views are pulled on demand, never cached
4. Every command is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "fincalc Team"
