"""
FinAPI

A small in-memory bank account API: accounts keyed by CPF, deposits,
withdrawals, balance and statement queries.
"""

__version__ = "1.0.0"
