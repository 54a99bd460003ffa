"""
Configuration models for PCV contracts.

PSMConfig captures every constructor parameter of a peg stability module;
DripConfig does the same for the PCV drip controller. Both validate their
own domain so a bad deployment is rejected before anything is registered on
the chain.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, validator

from ..types import (
    BASIS_POINTS_GRANULARITY,
    DEFAULT_CEILING_BASIS_POINTS,
    DEFAULT_FLOOR_BASIS_POINTS,
    MAX_FEE_BASIS_POINTS,
    MAX_RATE_LIMIT_PER_SECOND,
    SCALE,
)


class PSMConfig(BaseModel):
    """
    Deployment parameters for a PegStabilityModule.

    Amounts are raw token units (18 decimals for FEI). Fees and the oracle
    corridor are in basis points of parity.
    """

    # Fees
    max_fee_basis_points: int = Field(
        default=MAX_FEE_BASIS_POINTS,
        ge=0,
        le=BASIS_POINTS_GRANULARITY,
        description="Upper bound governance may set either fee to",
    )
    mint_fee_basis_points: int = Field(default=30, ge=0, description="Fee taken on mint")
    redeem_fee_basis_points: int = Field(default=30, ge=0, description="Fee taken on redeem")

    # Reserves
    reserves_threshold: int = Field(
        ...,
        gt=0,
        description="Reserve balance above which surplus is swept to the PCV deposit",
    )

    # Rate limit
    max_rate_limit_per_second: int = Field(default=MAX_RATE_LIMIT_PER_SECOND, ge=0)
    rate_limit_per_second: int = Field(..., ge=0, description="FEI replenished into the buffer per second")
    buffer_cap: int = Field(..., ge=0, description="Maximum FEI mintable in a burst")

    # Oracle
    floor_basis_points: int = Field(default=DEFAULT_FLOOR_BASIS_POINTS, gt=0)
    ceiling_basis_points: int = Field(default=DEFAULT_CEILING_BASIS_POINTS, gt=0)
    decimals_normalizer: int = Field(
        default=0,
        description="Power of ten applied to the oracle price to convert reserve units into FEI units",
    )
    do_invert: bool = Field(default=False, description="Whether the oracle quotes the inverse pair")

    class Config:
        """Pydantic configuration."""
        validate_assignment = True

    @validator("mint_fee_basis_points", "redeem_fee_basis_points")
    def validate_fee(cls, v, values):
        """Fees may not exceed the configured maximum."""
        max_fee = values.get("max_fee_basis_points", MAX_FEE_BASIS_POINTS)
        if v > max_fee:
            raise ValueError(f"Fee {v} exceeds max fee {max_fee}")
        return v

    @validator("rate_limit_per_second")
    def validate_rate_limit(cls, v, values):
        max_rate = values.get("max_rate_limit_per_second", MAX_RATE_LIMIT_PER_SECOND)
        if v > max_rate:
            raise ValueError(f"rateLimitPerSecond {v} exceeds maximum {max_rate}")
        return v

    @validator("ceiling_basis_points")
    def validate_corridor(cls, v, values):
        """The corridor must be non-empty: floor < ceiling."""
        floor = values.get("floor_basis_points")
        if floor is not None and floor >= v:
            raise ValueError("Oracle floor must be less than ceiling")
        return v

    @validator("decimals_normalizer")
    def validate_normalizer(cls, v):
        if abs(v) > 36:
            raise ValueError("decimals_normalizer out of range")
        return v

    @classmethod
    def create_price_bound_psm(cls, **kwargs: Any) -> "PSMConfig":
        """
        Parameters of a stablecoin PSM with a tight corridor around parity.

        Defaults match the DAI PSM: 30 bp fees, 10M FEI buffer refilling at
        10k FEI per second, 10M threshold.
        """
        params = {
            "mint_fee_basis_points": 30,
            "redeem_fee_basis_points": 30,
            "reserves_threshold": 10_000_000 * SCALE,
            "rate_limit_per_second": 10_000 * SCALE,
            "buffer_cap": 10_000_000 * SCALE,
        }
        params.update(kwargs)
        return cls(**params)

    @classmethod
    def create_stablecoin_psm(cls, reserve_decimals: int = 18, **kwargs: Any) -> "PSMConfig":
        """Price-bound PSM for a reserve token with `reserve_decimals` decimals."""
        kwargs.setdefault("decimals_normalizer", 18 - reserve_decimals)
        return cls.create_price_bound_psm(**kwargs)

    @classmethod
    def create_eth_psm(
        cls,
        floor_usd: int = 100,
        ceiling_usd: Optional[int] = 100_000,
        **kwargs: Any,
    ) -> "PSMConfig":
        """
        WETH PSM quoted in USD.

        The corridor is expressed in whole dollars and converted to basis
        points of a 1 USD quote, so it brackets any sane ETH price.
        """
        params = {
            "mint_fee_basis_points": 0,
            "redeem_fee_basis_points": 75,
            "reserves_threshold": 5_000 * SCALE,
            "rate_limit_per_second": 10_000 * SCALE,
            "buffer_cap": 30_000_000 * SCALE,
            "floor_basis_points": floor_usd * BASIS_POINTS_GRANULARITY,
            "ceiling_basis_points": (ceiling_usd or 1_000_000) * BASIS_POINTS_GRANULARITY,
        }
        params.update(kwargs)
        return cls(**params)


class DripConfig(BaseModel):
    """Parameters of a PCVDripController."""

    frequency: int = Field(default=3_600, gt=0, description="Seconds between drips")
    drip_amount: int = Field(..., gt=0, description="Reserve amount moved per drip")

    class Config:
        """Pydantic configuration."""
        validate_assignment = True
