"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveFloat = Annotated[float, Field(gt=0.0)]
PositiveInt = Annotated[int, Field(gt=0)]
PortInt = Annotated[int, Field(gt=0, lt=65536)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(validation_alias="DATABASE_URL")
    database_pool_size: PositiveInt = Field(default=50, validation_alias="DATABASE_POOL_SIZE")
    user_store_backend: Literal["database", "memory"] = Field(
        default="database",
        validation_alias="USER_STORE_BACKEND",
    )
    run_migrations_on_startup: bool = Field(
        default=True,
        validation_alias="RUN_MIGRATIONS_ON_STARTUP",
    )
    hasher_max_workers: PositiveInt = Field(default=4, validation_alias="HASHER_MAX_WORKERS")
    argon2_time_cost: PositiveInt = Field(default=3, validation_alias="ARGON2_TIME_COST")
    argon2_memory_cost_kib: Annotated[int, Field(ge=8)] = Field(
        default=65536,
        validation_alias="ARGON2_MEMORY_COST_KIB",
    )
    argon2_parallelism: PositiveInt = Field(default=4, validation_alias="ARGON2_PARALLELISM")
    request_timeout_seconds: PositiveFloat = Field(
        default=30.0,
        validation_alias="REQUEST_TIMEOUT_SECONDS",
    )
    api_host: NonEmptyStr = Field(default="0.0.0.0", validation_alias="API_HOST")
    api_port: PortInt = Field(default=8080, validation_alias="API_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @model_validator(mode="after")
    def _validate_argon2_memory_per_lane(self) -> "Settings":
        """Argon2 needs at least 8 KiB of memory for every parallel lane."""

        if self.argon2_memory_cost_kib < 8 * self.argon2_parallelism:
            raise ValueError("ARGON2_MEMORY_COST_KIB must be at least 8 * ARGON2_PARALLELISM")
        return self


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()  # type: ignore[call-arg]
