"""Banking API: accounts, login, balances and transfers."""

__version__ = "0.1.0"
