"""
SwimJournal - export and backup for a personal swim training journal.

This package contains:
- core: Journal domain models, flattening and CSV/JSON encoders
- infrastructure: Hand-rolled ZIP archives and backup files on disk
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
