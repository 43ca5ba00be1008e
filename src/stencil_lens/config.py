"""Configuration loading with pydantic-settings.

Precedence (highest to lowest):
1. Keyword overrides passed to load_config
2. Environment variables (STENCIL_LENS__<KEY>, STENCIL_LENS__LOGGING__<KEY>)
3. The plugin config dict handed over by the host
4. Built-in defaults (this file)

Examples:
    STENCIL_LENS__QUICK_INFO_CACHE_SIZE=1024
    STENCIL_LENS__LOGGING__LEVEL=DEBUG
    STENCIL_LENS__REMOVE='["caller", "apply"]'
"""

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from stencil_lens.core.errors import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        STENCIL_LENS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        STENCIL_LENS__LOGGING__FORMAT: console or json
        STENCIL_LENS__LOGGING__DESTINATION: stderr, stdout, or a file path
    """

    level: LogLevel = "INFO"
    format: Literal["json", "console"] = "console"
    destination: str = "stderr"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class PluginConfig(BaseSettings):
    """Options read from the host's plugin configuration block and the environment."""

    model_config = SettingsConfigDict(
        env_prefix="STENCIL_LENS__",
        env_nested_delimiter="__",
        case_sensitive=False,
        # Host plugin blocks also carry keys of their own, e.g. "name"
        extra="ignore",
    )

    remove: list[str] = Field(
        default_factory=lambda: ["caller"],
        description="Member completion names to drop from every completion list.",
    )
    quick_info_cache_size: int = Field(
        default=512,
        ge=1,
        description="Maximum quick-info results kept before least recently used ones are evicted.",
    )
    excluded_tag_prefixes: list[str] = Field(
        default_factory=lambda: ["test-"],
        description="Markup tag names starting with any of these are never offered.",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class _PluginBlockSource(PydanticBaseSettingsSource):
    """Settings source that reads the host's plugin config dict."""

    def __init__(self, settings_cls: type[BaseSettings], plugin_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._plugin_config = plugin_config

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._plugin_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._plugin_config


def _make_settings_class(plugin_config: dict[str, Any]) -> type[PluginConfig]:
    """Create a settings class bound to one plugin config block."""

    class HostPluginConfig(PluginConfig):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # First wins: init kwargs > env vars > plugin block
            return (init_settings, env_settings, _PluginBlockSource(settings_cls, plugin_config))

    return HostPluginConfig


def load_config(plugin_config: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> PluginConfig:
    """Build a PluginConfig from the host's config block, the environment and overrides.

    Raises:
        ConfigError: when a value does not validate.
    """
    settings_cls = _make_settings_class(dict(plugin_config or {}))
    try:
        return settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field_name = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field_name, err.get("input"), err["msg"]) from e
