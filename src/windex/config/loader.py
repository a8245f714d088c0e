"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (WINDEX__SECTION__KEY)
3. User config (~/.windex/config.yaml)
4. Built-in defaults (lowest priority)

The indexing core never sees any of this: the CLI resolves a root path, an
exclusion list and a database path here and hands them over as plain values.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from windex.config.constants import (
    CONFIG_FILE_NAME,
    DB_FILE_NAME,
    WINDEX_DIR_NAME,
    WINDOWS_DRIVE_ROOT,
    WSL_MOUNT_ROOT,
)
from windex.config.models import (
    DatabaseConfig,
    IndexConfig,
    LimitsConfig,
    LoggingConfig,
    WindexConfig,
)
from windex.core.errors import ConfigError


def windex_home(home: Path | None = None) -> Path:
    """Per-user data directory (~/.windex)."""
    return (home or Path.home()) / WINDEX_DIR_NAME


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one YAML document."""

    class WindexSettings(BaseSettings):
        """Root config. Env vars: WINDEX__LOGGING__LEVEL, WINDEX__INDEX__ROOT, etc."""

        model_config = SettingsConfigDict(
            env_prefix="WINDEX__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        index: IndexConfig = IndexConfig()
        limits: LimitsConfig = LimitsConfig()
        database: DatabaseConfig = DatabaseConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml file
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return WindexSettings


def load_config(config_path: Path | None = None, **kwargs: Any) -> WindexConfig:
    """Load config: defaults < YAML < env vars < kwargs.

    Args:
        config_path: YAML file to read. Must exist when given. Defaults to
                     ~/.windex/config.yaml, which may be absent.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On a missing explicit config file, invalid YAML syntax
            or validation errors.
    """
    if config_path is not None and not config_path.is_file():
        raise ConfigError.file_not_found(str(config_path))
    yaml_config = _load_yaml(config_path or windex_home() / CONFIG_FILE_NAME)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return WindexConfig.model_validate(settings.model_dump())


def default_root() -> str:
    """/mnt/ when it exists (WSL, MSYS), otherwise the C: drive."""
    return WSL_MOUNT_ROOT if Path(WSL_MOUNT_ROOT).exists() else WINDOWS_DRIVE_ROOT


def get_root(config: WindexConfig) -> str:
    return config.index.root or default_root()


def get_db_path(
    config: WindexConfig,
    home: Path | None = None,
    *,
    override: Path | None = None,
) -> Path:
    """Resolve the database file, creating its parent directory if needed.

    Precedence: override (the --db option), then index.db_path, then
    ~/.windex/.winindex.db.

    Raises:
        ConfigError: If the parent directory cannot be created.
    """
    if override is not None:
        db_path = override.expanduser()
    elif config.index.db_path:
        db_path = Path(config.index.db_path).expanduser()
    else:
        db_path = windex_home(home) / DB_FILE_NAME
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError.invalid_value("index.db_path", str(db_path), str(e)) from e
    return db_path
