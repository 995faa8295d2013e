"""
Return models: convert configuration + a normal deviate into yearly returns.
"""

from .base import ReturnModel
from .model import MarketReturnModel

__all__ = [
    "ReturnModel",
    "MarketReturnModel",
]
