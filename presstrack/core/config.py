from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_press_numbers(v: Any) -> list[int] | Any:
    if isinstance(v, str) and not v.startswith("["):
        return [int(i.strip()) for i in v.split(",") if i.strip()]
    elif isinstance(v, int):
        return [v]
    return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "presstrack"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Direct connection string, sqlite for local runs
    DATABASE_URL: str = "sqlite:///./presstrack.db"
    DB_POOL_PRE_PING: bool = True
    # Applied to remote ledgers only, sqlite ignores it
    DB_STATEMENT_TIMEOUT_SECONDS: int = 30

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace(
                "postgresql://", "postgresql+psycopg://", 1
            )
        elif self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql+psycopg://", 1)
        return self.DATABASE_URL

    # Press 1 was retired, the set is not a contiguous range
    VALID_PRESS_NUMBERS: Annotated[
        list[int] | str, BeforeValidator(parse_press_numbers)
    ] = [0, 2, 3, 4, 5]

    # Tool wear thresholds (cumulative cycles)
    TOOL_CYCLE_WARNING: int = 800_000
    TOOL_CYCLE_ERROR: int = 1_000_000

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"
    LOG_SQL: bool = False

    @model_validator(mode="after")
    def _check_thresholds(self) -> Self:
        if self.TOOL_CYCLE_WARNING >= self.TOOL_CYCLE_ERROR:
            raise ValueError(
                "TOOL_CYCLE_WARNING must be lower than TOOL_CYCLE_ERROR "
                f"({self.TOOL_CYCLE_WARNING} >= {self.TOOL_CYCLE_ERROR})"
            )
        if not self.VALID_PRESS_NUMBERS:
            raise ValueError("VALID_PRESS_NUMBERS cannot be empty")
        return self

    @property
    def press_numbers(self) -> tuple[int, ...]:
        """Valid press numbers, sorted."""
        return tuple(sorted(set(self.VALID_PRESS_NUMBERS)))


settings = Settings()  # type: ignore
