"""Trade journal: market-data synchronization and trade-lifecycle engine."""

__version__ = "0.1.0"
