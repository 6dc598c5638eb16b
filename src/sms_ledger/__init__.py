"""SMS Ledger - transaction extraction from bank SMS notifications"""

__version__ = "0.1.0"
