from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from rebound.bootstrap.config.loader import get_configfile
from rebound.core.models.config import BackoffConfig


class BackoffSettings(BaseModel):
    minimum: Annotated[
        float,
        Field(
            description=(
                "Delay (in seconds) before the first retry.\n"
                "Every following delay is derived from it by exponential growth."
            ),
            default=0.1,
            ge=0
        )
    ]

    maximum: Annotated[
        float,
        Field(
            description="Largest delay (in seconds) ever returned. Caps the growth.",
            default=60.0,
            ge=0
        )
    ]

    factor: Annotated[
        float,
        Field(
            description="Multiplicative growth rate applied after each attempt.",
            default=2.0,
            gt=0
        )
    ]

    max_attempts: Annotated[
        int,
        Field(
            description=(
                "Number of attempts allowed before the backoff gives up.\n"
                "Zero means unlimited."
            ),
            default=0,
            ge=0
        )
    ]

    jitter: Annotated[
        bool,
        Field(
            description=(
                "Randomise each delay by +/- minimum to keep contending clients\n"
                "from retrying in lockstep."
            ),
            default=False
        )
    ]

    @model_validator(mode="after")
    def check_bounds(self) -> "BackoffSettings":
        if self.maximum < self.minimum:
            raise ValueError(
                f"maximum ({self.maximum}) must be greater than or equal to minimum ({self.minimum})"
            )
        return self

    def to_config(self) -> BackoffConfig:
        return BackoffConfig(
            minimum=self.minimum,
            maximum=self.maximum,
            factor=self.factor,
            max_attempts=self.max_attempts,
        )


class ReboundConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REBOUND_",
        env_nested_delimiter="__",
        extra="allow"
    )

    backoff: Annotated[
        BackoffSettings,
        Field(
            description=(
                "Backoff strategy configuration.\n"
                "Defines how retry delays grow, their bounds, the optional attempt\n"
                "cap and whether delays are randomised."
            ),
            default_factory=BackoffSettings
        )
    ]

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Logging verbosity.",
            default="INFO"
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        configfile = get_configfile()
        if configfile is None:
            return init_settings, env_settings

        return init_settings, env_settings, YamlConfigSettingsSource(settings_cls, yaml_file=configfile)
