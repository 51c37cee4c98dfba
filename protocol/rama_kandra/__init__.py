"""
RAMA-KANDRA - Liquidity and Lending

"I love my daughter very much. I find her to be the most beautiful
thing I have ever seen. But where we are from, that is not enough."

Reads the liquidity reserve to see what an asset is worth, and lends it
out against collateral sized from that reading.
"""

from .lending import LendingPool
from .liquidity import ExternalReserve

__all__ = ["ExternalReserve", "LendingPool"]
