"""Oracle price corridor."""

from ..oracle.oracle import OracleReading
from ..types import BASIS_POINTS_GRANULARITY, InvalidParameter, PriceOutOfBounds, SCALE


class PriceBounds:
    """
    Floor/ceiling band, in basis points of parity, that the raw oracle quote
    must fall inside (inclusive) for the PSM to trade.
    """

    def __init__(self, floor_basis_points: int, ceiling_basis_points: int):
        if floor_basis_points <= 0:
            raise InvalidParameter("PegStabilityModule: invalid floor")
        if floor_basis_points >= ceiling_basis_points:
            raise InvalidParameter("PegStabilityModule: floor must be less than ceiling")
        self.floor_basis_points = floor_basis_points
        self.ceiling_basis_points = ceiling_basis_points

    @property
    def floor(self) -> int:
        return self.floor_basis_points * SCALE // BASIS_POINTS_GRANULARITY

    @property
    def ceiling(self) -> int:
        return self.ceiling_basis_points * SCALE // BASIS_POINTS_GRANULARITY

    def is_valid(self, reading: OracleReading) -> bool:
        return reading.valid and self.floor <= reading.price <= self.ceiling

    def validate(self, reading: OracleReading) -> None:
        if not self.is_valid(reading):
            raise PriceOutOfBounds("PegStabilityModule: price out of bounds")

    def set_floor(self, floor_basis_points: int) -> None:
        if floor_basis_points <= 0:
            raise InvalidParameter("PegStabilityModule: invalid floor")
        if floor_basis_points >= self.ceiling_basis_points:
            raise InvalidParameter("PegStabilityModule: floor must be less than ceiling")
        self.floor_basis_points = floor_basis_points

    def set_ceiling(self, ceiling_basis_points: int) -> None:
        if ceiling_basis_points <= 0:
            raise InvalidParameter("PegStabilityModule: invalid ceiling")
        if ceiling_basis_points <= self.floor_basis_points:
            raise InvalidParameter("PegStabilityModule: ceiling must be greater than floor")
        self.ceiling_basis_points = ceiling_basis_points
