"""
Base class for annual return models.
"""

from __future__ import annotations


class ReturnModel:
    """Interface for turning (year, normal deviate) into an annual return."""

    def gross_return(self, year: int, z: float) -> float:
        """Realized fractional return for a 1-based year, before fees."""
        raise NotImplementedError

    def net_return(self, gross: float) -> float:
        """Return actually compounded by fee-bearing balances."""
        raise NotImplementedError
