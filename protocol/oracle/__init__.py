"""
ORACLE - Trusted Price Feed

"I'd ask you to sit down, but you're not going to anyway."

Collects prices posted by trusted sources and answers with their median.
"""

from .aggregator import median_price
from .initializer import OracleInitializer
from .trustful import PriceOracle

__all__ = ["PriceOracle", "OracleInitializer", "median_price"]
