"""
Finance Tracker - Source Package

A personal finance tracker: record income, expenses and loans, and see
balance, totals, outstanding debt and money owed to you at a glance.

DESIGN PRINCIPLES:
1. Totals are derived on every read, never stored
2. Every record belongs to exactly one user
3. Store failures degrade to a renderable state
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
