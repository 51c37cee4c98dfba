"""
MEROVINGIAN - Oracle-Priced Exchange

"Causality. There is no escape from it."

Trades unique collectibles, always at the Oracle's current word.
"""

from .collectibles import AssetRegistry
from .exchange import Marketplace

__all__ = ["AssetRegistry", "Marketplace"]
