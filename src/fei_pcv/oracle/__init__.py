"""Oracle collaborators and price normalization."""

from .oracle import MockOracle, Oracle, OracleReading
from .reader import OraclePriceReader

__all__ = ["MockOracle", "Oracle", "OracleReading", "OraclePriceReader"]
