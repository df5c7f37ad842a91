"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority, used by the CLI for explicit flags)
2. Environment variables (COVSWEEP__KEY)
3. Repo config (<project>/.covsweep.yaml)
4. Global config (~/.config/covsweep/config.yaml)
5. Built-in defaults (lowest priority)

The merged settings are validated into a frozen SweepConfig.
"""

import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from covsweep.config.constants import (
    DEFAULT_COVER_MODE,
    DEFAULT_GO_BINARY,
    DEFAULT_OUTPUT_FILENAME,
    DEFAULT_PROFILE_FILENAME,
    DEFAULT_TEST_FILE_PATTERN,
    ENV_PREFIX,
    REPO_CONFIG_FILENAME,
)
from covsweep.config.models import LoggingConfig, SweepConfig
from covsweep.core.errors import ConfigError
from covsweep.core.excludes import DEFAULT_IGNORES

GLOBAL_CONFIG_PATH = Path("~/.config/covsweep/config.yaml").expanduser()


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


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


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
    """Create a Settings class with instance-based YAML source (thread-safe)."""

    class CovsweepSettings(BaseSettings):
        """Raw settings. Env vars: COVSWEEP__COVERMODE, COVSWEEP__LOGGING__LEVEL, etc."""

        model_config = SettingsConfigDict(
            env_prefix=ENV_PREFIX,
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        project_root: Path | None = None
        covermode: str = DEFAULT_COVER_MODE
        # Comma separated / shell-quoted strings are split by SweepConfig
        ignores: Annotated[str | frozenset[str], NoDecode] = DEFAULT_IGNORES
        test_args: Annotated[str | tuple[str, ...], NoDecode] = ()
        go_binary: str = DEFAULT_GO_BINARY
        test_file_pattern: str = DEFAULT_TEST_FILE_PATTERN
        profile_filename: str = DEFAULT_PROFILE_FILENAME
        output_filename: str = DEFAULT_OUTPUT_FILENAME
        import_path: str | None = None
        max_parallel: int | None = None
        timeout_sec: float | None = None
        logging: LoggingConfig = LoggingConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return CovsweepSettings


def _config_error(e: ValidationError) -> ConfigError:
    err = e.errors()[0]
    field = ".".join(str(loc) for loc in err["loc"]) or "config"
    return ConfigError.invalid_value(field, err.get("input"), err["msg"])


def load_config(project_root: Path | None = None, **kwargs: Any) -> SweepConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        project_root: Directory tree to sweep. Defaults to the current
                      working directory.
        **kwargs: Override values (highest precedence). None values are
                  treated as "not given".

    Returns:
        Frozen, fully validated configuration.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()
    overrides = {key: value for key, value in kwargs.items() if value is not None}

    yaml_config = _load_yaml(GLOBAL_CONFIG_PATH)
    repo_config = project_root / REPO_CONFIG_FILENAME
    if repo_config.is_file():
        yaml_config = _deep_merge(yaml_config, _load_yaml(repo_config))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(project_root=project_root, **overrides)
        return SweepConfig.model_validate(settings.model_dump())
    except ValidationError as e:
        raise _config_error(e) from e


def resolve_project(project: str, gopath: str | None = None) -> tuple[Path, str | None]:
    """Resolve a project argument to (project_root, import_path).

    An existing directory is used as-is with no import path. Otherwise the
    argument is looked up as a package path under $GOPATH/src, and the
    argument itself becomes the import path of the project root.

    Raises:
        ConfigError: If the project resolves to no directory.
    """
    if not project or not project.strip():
        raise ConfigError.invalid_value("project", project, "project path is empty")

    direct = Path(project).expanduser()
    if direct.is_dir():
        return direct.resolve(), None

    gopath = os.environ.get("GOPATH") if gopath is None else gopath
    if gopath and gopath.strip() not in ("", "."):
        import_path = project.strip("/")
        # GOPATH may list several workspaces; the first match wins
        for entry in gopath.split(os.pathsep):
            if not entry or entry == ".":
                continue
            candidate = Path(entry).expanduser() / "src" / import_path
            if candidate.is_dir():
                return candidate.resolve(), import_path

    raise ConfigError.invalid_value(
        "project", project, "not a directory and not found under $GOPATH/src"
    )
