"""Configuration management using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Generator settings loaded from environment variables (POPGEN_*)."""

    model_config = SettingsConfigDict(
        env_prefix="POPGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "POPGEN"
    log_level: str = "INFO"
    seed: int | None = None

    # Players
    players: int = Field(default=4, ge=1)
    player_exponent: float = 1.0        # 1.175 for superlinear scaling

    # Pressure decay
    base_pressure_decay_rate: float = 600.0
    pressure_decay_rate_multiplier: float = 0.0175
    pressure_decay_rate_multiplier_in_time: float = 3.0   # "difficulty"
    bot_path_length: float = 1.0

    # Pressure per second factors
    pps_factor_tfbot: float = 1.0
    pps_factor_tank: float = 0.05

    # Currency
    starting_currency: int = 1200
    currency_per_wave: int = 1000
    currency_per_wave_spread: int = 0
    currency_per_wavespawn: int = 100
    currency_per_wavespawn_spread: int = 0
    currency_per_wavespawn_limit: int = 0   # 0 = no limit
    currency_pressure_factor: float = 0.25

    # Pacing
    max_time: int = Field(default=300, gt=0)      # ticks per wave
    max_wavespawns: int = Field(default=0, ge=0)  # 0 = unlimited


settings = Settings()
