"""Logic-key automation broker for a trading screen.

The package routes short user-configured logic keys to automation workflows
and brokers the single running automation service that the UI binds to.
"""

__version__ = "0.1.0"
