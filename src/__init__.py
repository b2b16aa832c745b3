"""
Personal Ledger - Source Package

A single-account ledger: deposits, withdrawals, a statement, and a
history file that survives restarts.

DESIGN PRINCIPLES:
1. The running balance is recorded on every transaction
2. History is append-only
3. Memory never runs ahead of disk
4. A bad ledger file never stops the app from starting
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Ledger Team"
