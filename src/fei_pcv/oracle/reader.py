"""Oracle price normalization for the PSM."""

from ..types import PriceOutOfBounds, SCALE
from .oracle import Oracle, OracleReading


class OraclePriceReader:
    """
    Turns a raw oracle quote into the price the PSM trades at.

    The raw quote is what the corridor is checked against. The trade price
    is the quote inverted when the oracle reports the opposite pair, then
    shifted by `decimals_normalizer` powers of ten so that
    `price * reserve_amount / 1e18` is denominated in FEI units.
    """

    def __init__(self, oracle: Oracle, do_invert: bool = False, decimals_normalizer: int = 0):
        self.oracle = oracle
        self.do_invert = do_invert
        self.decimals_normalizer = decimals_normalizer

    def read_quote(self) -> OracleReading:
        return self.oracle.read()

    def adjust(self, quote: int) -> int:
        """Apply inversion and decimal normalization to a raw quote."""
        price = quote
        if self.do_invert:
            if price == 0:
                raise PriceOutOfBounds("PegStabilityModule: price out of bounds")
            price = SCALE * SCALE // price
        if self.decimals_normalizer < 0:
            price = price // 10 ** (-self.decimals_normalizer)
        else:
            price = price * 10**self.decimals_normalizer
        return price

    def read_oracle(self) -> int:
        return self.adjust(self.read_quote().price)
