"""
Pydantic Validated Models
=========================
Pydantic validation layer for configuration objects coming from the CLI
or any other outer boundary.

Usage:
    from oncall.models.validated import ValidatedSchedulerConfig

    config = ValidatedSchedulerConfig(horizon=4, lookback=1).to_dataclass()

Note: the solver itself consumes the plain `SchedulerConfig` dataclass.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from oncall.models.constraints import SchedulerConfig


class ValidatedSchedulerConfig(BaseModel):
    """
    Pydantic-validated scheduler configuration.

    Use this for strict validation at API boundaries.
    Can be converted to/from the dataclass SchedulerConfig.
    """
    model_config = ConfigDict(validate_assignment=True)

    # Window
    horizon: int = Field(default=4, ge=1, le=520, description="Future periods to schedule")
    lookback: int = Field(default=1, ge=0, le=520, description="Committed periods to anchor against")

    # Solver behavior
    time_limit_seconds: float = Field(default=30.0, gt=0, le=3600, description="Max solve time")
    num_workers: int = Field(default=4, ge=1, le=64)
    seed: Optional[int] = Field(default=None, ge=0)

    # Costs
    base_weight: int = Field(default=1, ge=1)
    holiday_weight: int = Field(default=10, ge=1)
    upper_slack_multiplier: int = Field(default=2, ge=1, le=100)

    @model_validator(mode="after")
    def validate_model(self):
        """Cross-field validation."""
        if self.holiday_weight < self.base_weight:
            raise ValueError("holiday_weight cannot be lower than base_weight")
        return self

    def to_dataclass(self) -> SchedulerConfig:
        """Convert to dataclass SchedulerConfig for solver compatibility."""
        return SchedulerConfig(
            horizon=self.horizon,
            lookback=self.lookback,
            time_limit_seconds=self.time_limit_seconds,
            num_workers=self.num_workers,
            seed=self.seed,
            base_weight=self.base_weight,
            holiday_weight=self.holiday_weight,
            upper_slack_multiplier=self.upper_slack_multiplier,
        )

    @classmethod
    def from_dataclass(cls, config: SchedulerConfig) -> "ValidatedSchedulerConfig":
        """Create from dataclass SchedulerConfig."""
        return cls(**config.to_dict())
