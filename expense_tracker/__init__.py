"""
Expense Tracker - Core Package

The computational core of a personal expense tracker: a local expense
repository, a pure aggregation engine and an export engine. Forms, charts
and navigation live in the presentation layer that calls into this package.

DESIGN PRINCIPLES:
1. Aggregations are pure and take the clock as an argument
2. Corrupt stored data degrades to an empty list, never a crash
3. Money is Decimal end to end
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
