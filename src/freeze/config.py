"""Configuration management using Pydantic settings.

Every tuning constant of a session lives here so a host can reshape the
game from the environment (``FREEZE_SPOTLIGHT_RADIUS=150``) or a ``.env``
file without touching code.  Rates are per second; distances are field
units (the default field is 1200 x 800).
"""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_SPOTLIGHTS: list[tuple[float, float]] = [
    (200.0, 300.0),
    (350.0, 250.0),
    (500.0, 200.0),
    (650.0, 200.0),
    (800.0, 250.0),
    (950.0, 300.0),
]


class SimulationSettings(BaseSettings):
    """Session settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FREEZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Field
    field_width: float = Field(1200.0, gt=0)
    field_height: float = Field(800.0, gt=0)

    # Spotlights (arc across the upper field, overlapping neighbours)
    spotlight_positions: list[tuple[float, float]] = Field(
        default_factory=lambda: list(_DEFAULT_SPOTLIGHTS)
    )
    spotlight_radius: float = Field(120.0, gt=0)

    # Battery
    battery_max: float = Field(100.0, gt=0)
    battery_base_charge_rate: float = Field(30.0, ge=0)
    battery_per_delivery_bonus: float = Field(6.0, ge=0)
    battery_single_drain: float = Field(18.0, gt=0)
    battery_multi_spotlight_multiplier: float = Field(1.5, gt=0)

    # Inmates
    freeze_threshold: float = Field(5.0, gt=0)  # seconds of unbroken light
    inmate_type_weights: dict[str, float] = Field(
        default_factory=lambda: {"regular": 1.0}
    )
    inmate_entry_x: tuple[float, float] = (200.0, 1000.0)
    inmate_entry_y: float = -20.0
    inmate_exit_y: float = 850.0

    # Spawning
    auto_spawn: bool = True
    spawn_interval: float = Field(2.0, gt=0)
    spawn_interval_min: float = Field(0.5, gt=0)
    spawn_interval_decay: float = Field(0.99, gt=0, le=1.0)

    # Police
    policeman_count: int = Field(3, ge=0)
    policeman_type: str = "patrol_officer"
    patrol_bounds: tuple[float, float, float, float] = (50.0, 50.0, 1150.0, 600.0)
    drop_off_position: tuple[float, float] = (1050.0, 400.0)
    drop_off_threshold: float = Field(10.0, gt=0)

    # Scoring and progression
    starting_lives: int = Field(35, ge=1)
    score_light_catch: int = 10
    score_police_capture: int = 5
    score_delivery: int = 20
    level_score_step: int = Field(200, gt=0)

    # Determinism
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "SimulationSettings":
        if self.spawn_interval_min > self.spawn_interval:
            raise ValueError("spawn_interval_min must not exceed spawn_interval")
        if not self.inmate_type_weights:
            raise ValueError("inmate_type_weights must name at least one type")
        if any(w <= 0 for w in self.inmate_type_weights.values()):
            raise ValueError("inmate_type_weights must be positive")
        min_x, min_y, max_x, max_y = self.patrol_bounds
        if min_x >= max_x or min_y >= max_y:
            raise ValueError("patrol_bounds must be (min_x, min_y, max_x, max_y)")
        dx, dy = self.drop_off_position
        if not (min_x <= dx <= max_x and min_y <= dy <= max_y):
            raise ValueError("drop_off_position must lie inside patrol_bounds")
        lo, hi = self.inmate_entry_x
        if lo > hi:
            raise ValueError("inmate_entry_x must be (low, high)")
        return self


settings = SimulationSettings()
