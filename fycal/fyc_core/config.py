from typing import Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.errors import StyleSyntaxError
from rich.style import Style

from fycal.fyc_calendar.models import ColorMode, WeekStart
from fycal.fyc_core.errors import ConfigError

ENV_PREFIX = "FYCAL_"


class Config(BaseSettings):
    """Configuration for the calendar tool, overridable through FYCAL_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    FISCAL_YEAR_START_MONTH: int = Field(default=7, ge=1, le=12)
    FIRST_DAY_OF_WEEK: Optional[WeekStart] = None  # None: ask the operating system
    COLOR: ColorMode = ColorMode.AUTO
    MONTHS_PER_ROW: int = Field(default=3, ge=1)
    TODAY_STYLE: str = "reverse"
    QUERY_TIMEOUT_SECONDS: float = Field(default=2.0, gt=0)
    # https://no-color.org: any non-empty value turns off automatic color
    NO_COLOR: bool = Field(default=False, validation_alias="NO_COLOR")

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data):
        if isinstance(data, dict):
            return {key: value for key, value in data.items()
                    if not (isinstance(value, str) and not value.strip())}
        return data

    @field_validator("FIRST_DAY_OF_WEEK", mode="before")
    @classmethod
    def _parse_week_start(cls, value):
        if isinstance(value, str):
            return WeekStart.parse(value)
        return value

    @field_validator("COLOR", mode="before")
    @classmethod
    def _parse_color(cls, value):
        if isinstance(value, str):
            return ColorMode.parse(value)
        return value

    @field_validator("TODAY_STYLE")
    @classmethod
    def _parse_style(cls, value: str) -> str:
        value = value.strip()
        try:
            Style.parse(value)
        except StyleSyntaxError as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("NO_COLOR", mode="before")
    @classmethod
    def _any_value_is_set(cls, value):
        if isinstance(value, str):
            return bool(value.strip())
        return value

    @classmethod
    def env_name(cls, field_name: str) -> str:
        alias = cls.model_fields[field_name].validation_alias
        return alias if isinstance(alias, str) else ENV_PREFIX + field_name

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from the defaults and the process environment."""
        try:
            return cls()
        except ValidationError as e:
            error = e.errors()[0]
            location = error["loc"]
            if location and location[0] in cls.model_fields:
                name = cls.env_name(str(location[0]))
            else:
                name = ENV_PREFIX.rstrip("_")
            raise ConfigError(f"{name}: {error['msg']}") from e
