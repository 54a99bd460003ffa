"""Basis-point mint and redeem fees."""

from ..types import BASIS_POINTS_GRANULARITY, InvalidParameter, MAX_FEE_BASIS_POINTS


class FeeCalculator:
    def __init__(
        self,
        mint_fee_basis_points: int,
        redeem_fee_basis_points: int,
        max_fee_basis_points: int = MAX_FEE_BASIS_POINTS,
    ):
        self.max_fee_basis_points = max_fee_basis_points
        self.mint_fee_basis_points = 0
        self.redeem_fee_basis_points = 0
        self.set_mint_fee(mint_fee_basis_points)
        self.set_redeem_fee(redeem_fee_basis_points)

    @staticmethod
    def _apply(amount: int, fee_basis_points: int) -> int:
        return amount * (BASIS_POINTS_GRANULARITY - fee_basis_points) // BASIS_POINTS_GRANULARITY

    def apply_mint_fee(self, amount: int) -> int:
        return self._apply(amount, self.mint_fee_basis_points)

    def apply_redeem_fee(self, amount: int) -> int:
        return self._apply(amount, self.redeem_fee_basis_points)

    def set_mint_fee(self, fee_basis_points: int) -> None:
        if not 0 <= fee_basis_points <= self.max_fee_basis_points:
            raise InvalidParameter("PegStabilityModule: Mint fee exceeds max fee")
        self.mint_fee_basis_points = fee_basis_points

    def set_redeem_fee(self, fee_basis_points: int) -> None:
        if not 0 <= fee_basis_points <= self.max_fee_basis_points:
            raise InvalidParameter("PegStabilityModule: Redeem fee exceeds max fee")
        self.redeem_fee_basis_points = fee_basis_points
