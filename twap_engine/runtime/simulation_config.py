"""Simulation configuration model.

Wires an engine against in-process collaborators (asset ledger,
constant-product pool, oracle, manual clock) from one JSON document.

JSON example:
    {
      "id": "eth-usdc-demo",
      "identities": {"engine": "0xE1", "owner": "0xA1", "executor": "0xB1"},
      "pool": {"address": "0xP1", "reserve_in": 1000000000000000000000, "reserve_out": 2000000000000000000000000, "fee_bps": 30},
      "oracle": {"address": "0xO1", "kind": "pool"},
      "clock": {"start": 1700000000, "tick_seconds": 12, "max_ticks": 1000},
      "strategy": { ... StrategyParams ... }
    }
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from twap_engine.core.domain.types import StrategyParams


class IdentitiesConfig(BaseModel):
    engine: str = Field(..., min_length=1)
    owner: str = Field(..., min_length=1)
    executor: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")


class PoolConfig(BaseModel):
    address: str = Field(..., min_length=1)
    reserve_in: int = Field(..., gt=0)
    reserve_out: int = Field(..., gt=0)
    fee_bps: int = Field(default=30, ge=0, lt=10_000)

    model_config = ConfigDict(extra="forbid")


class OracleConfig(BaseModel):
    address: str = Field(..., min_length=1)
    kind: Literal["pool", "fixed"] = "pool"
    price: int | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_price_for_kind(self) -> OracleConfig:
        if self.kind == "fixed" and self.price is None:
            raise ValueError("price is required when oracle kind is 'fixed'")
        return self


class ClockConfig(BaseModel):
    start: int = Field(..., ge=0)
    tick_seconds: int = Field(default=12, gt=0)
    max_ticks: int = Field(default=10_000, gt=0)

    model_config = ConfigDict(extra="forbid")


class SimulationConfig(BaseModel):
    """Structured-only simulation configuration."""

    id: str = Field(..., min_length=1)
    identities: IdentitiesConfig
    pool: PoolConfig
    oracle: OracleConfig
    clock: ClockConfig
    strategy: StrategyParams

    # Input funding minted to the engine account; defaults to the order total.
    funding_amount_in: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> SimulationConfig:
        """Create a SimulationConfig instance from a JSON-compatible object."""
        return cls.model_validate(obj)

    @model_validator(mode="after")
    def validate_consistency(self) -> SimulationConfig:
        """Validate wiring that the engine itself cannot see."""
        if self.strategy.venue != self.pool.address:
            raise ValueError("strategy.venue must be the pool address")
        if self.strategy.oracle != self.oracle.address:
            raise ValueError("strategy.oracle must be the oracle address")
        return self

    @property
    def funding(self) -> int:
        if self.funding_amount_in is None:
            return self.strategy.total_amount_in
        return self.funding_amount_in
