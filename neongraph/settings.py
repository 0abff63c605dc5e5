from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


ChartMode = Literal["bar", "line"]
Granularity = Literal["weekly", "daily"]
ChartStyle = Literal["neon", "gradient", "solid"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    github_token: str | None = None
    gh_user: str = "Disumakadiya"
    github_graphql_url: str = "https://api.github.com/graphql"

    chart_mode: ChartMode = "bar"
    chart_granularity: Granularity = "weekly"
    chart_style: ChartStyle = "neon"

    output_dir: Path = Path("dist")
    output_filename: str = "neon-contributions.png"

    log_level: LogLevel = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("chart_mode", mode="before")
    @classmethod
    def normalize_chart_mode(cls, value: object) -> str:
        # Anything other than "line" draws bars.
        if isinstance(value, str) and value.strip().lower() == "line":
            return "line"
        return "bar"

    @field_validator("chart_granularity", "chart_style", mode="before")
    @classmethod
    def lowercase_choice(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("github_token", mode="before")
    @classmethod
    def blank_token_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_filename
