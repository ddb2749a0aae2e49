"""
harbor-migrate - Copy every project and image from one Harbor registry to another
"""

__version__ = "1.0.0"

from .core import HarborMigrator
from .errors import MigrationError

__all__ = ["HarborMigrator", "MigrationError"]
