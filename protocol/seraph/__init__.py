"""
SERAPH - Access Registry

"You do not truly know someone until you fight them."

Guards the Oracle. Keeps the enumerable table of who may do what.
"""

from .registry import AccessRegistry

__all__ = ["AccessRegistry"]
