from enum import Enum
from typing import Optional, Tuple, Type

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class OutputSettings(BaseSettings):
    """Settings controlling how extracted definitions are printed."""

    signatures: bool = Field(
        default=False,
        description="If True, method-like definitions are printed with their sig.",
    )
    comments: bool = Field(
        default=False,
        description="If True, comments found in the file are printed after the definitions.",
    )
    format: OutputFormat = Field(
        default=OutputFormat.TEXT,
        description='Output format, "text" or "json".',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # keyword arguments > environment > .env > TOML file
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(
    env_prefix: Optional[str] = "RUBYDEFS_",
    env_file: Optional[str] = None,
    toml_file: Optional[str] = None,
    **kwargs,
) -> OutputSettings:
    config_dict = SettingsConfigDict(
        env_prefix=env_prefix or "",
        env_file=env_file,
        toml_file=toml_file,
    )

    class Settings(OutputSettings):
        model_config = config_dict

    return Settings(**kwargs)
