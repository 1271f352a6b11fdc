"""
Dispatcher Configuration
========================

This module centralizes every constant the build dispatcher uses and the
DispatchConfig settings model built on top of them.

RESOLUTION ORDER (later wins):
-----------------------------
1. Built-in defaults (the constants below)
2. YAML settings file: $TRACEBUILD_CONFIG, else <project_root>/tracebuild.yaml
3. Environment variables: TRACEBUILD_PROJECT_ROOT, TRACEBUILD_LOG_LEVEL,
   TRACEBUILD_LOG_FILE

The defaults reproduce the lynx-devtool monorepo layout, so running the
dispatcher from the repository root needs no settings file at all.

MODIFICATION RULES:
------------------
1. The remediation text printed on Windows failure is built from these
   values. If the release asset naming changes upstream, update
   RELEASE_ASSET_PATTERN and RELEASES_URL together.
2. Commands are lists, never shell strings. They are passed straight to
   subprocess.run without a shell.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import ConfigFileError, ConfigValidationError


# =============================================================================
# Banner Layout
# =============================================================================

BANNER_RULE = "═" * 47
BANNER_TITLE = "  Lynx Trace Build Script"


# =============================================================================
# Artifact Location
# =============================================================================
#
# The prebuilt archive lives under the devtool CLI package so it is picked
# up by that package's own build. Only its existence is checked here.
#

DEFAULT_PACKAGE_DIR = "packages/lynx-devtool-cli"
RESOURCES_DIR_NAME = "resources"
DEFAULT_ARTIFACT_NAME = "lynx-trace.tar.gz"


# =============================================================================
# Collaborators
# =============================================================================

DEFAULT_FETCH_COMMAND = ["node", "scripts/download-lynx-trace-prebuilt.js"]
"""Downloads the prebuilt archive to the artifact path. Exits 0 on success."""

DEFAULT_BUILD_COMMAND = ["node", "scripts/build-lynx-trace-output.js"]
"""Runs the full local build of the trace UI. Exits 0 on success."""

SCRIPT_SUFFIXES = (".js", ".mjs", ".cjs", ".py", ".sh", ".ps1", ".bat", ".cmd")
"""Relative command arguments with these suffixes are resolved against project_root."""


# =============================================================================
# User Guidance
# =============================================================================

DEFAULT_REFRESH_HINT = "pnpm run download:lynx-trace"
DEFAULT_RELEASES_URL = "https://github.com/lynx-family/lynx-trace/releases"
DEFAULT_RELEASE_ASSET_PATTERN = "perfetto-ui-release-*.tar.gz"
DEFAULT_WSL_PROJECT_DIR = "/mnt/e/lynx/lynx-devtool"
WSL_BUILD_COMMAND = "pnpm run build:lynx-trace"

WINDOWS_BUILD_REASON = "Perfetto does not officially support building UI on Windows"
PREBUILT_SOURCE_REPO = "lynx-family/lynx-trace"


# =============================================================================
# Settings File and Environment
# =============================================================================

CONFIG_FILE_NAME = "tracebuild.yaml"
ENV_CONFIG_FILE = "TRACEBUILD_CONFIG"
ENV_PROJECT_ROOT = "TRACEBUILD_PROJECT_ROOT"
ENV_LOG_LEVEL = "TRACEBUILD_LOG_LEVEL"
ENV_LOG_FILE = "TRACEBUILD_LOG_FILE"

DEFAULT_LOG_LEVEL = "WARNING"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Settings Model
# =============================================================================


class DispatchConfig(BaseModel):
    """
    Settings for one dispatcher run.

    Strict validation (extra fields forbidden) so a typo in tracebuild.yaml
    fails loudly instead of silently falling back to a default.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    project_root: Path = Path(".")
    package_dir: str = DEFAULT_PACKAGE_DIR
    artifact_name: str = DEFAULT_ARTIFACT_NAME
    fetch_command: List[str] = Field(default_factory=lambda: list(DEFAULT_FETCH_COMMAND))
    build_command: List[str] = Field(default_factory=lambda: list(DEFAULT_BUILD_COMMAND))
    refresh_hint: str = DEFAULT_REFRESH_HINT
    releases_url: str = DEFAULT_RELEASES_URL
    release_asset_pattern: str = DEFAULT_RELEASE_ASSET_PATTERN
    wsl_project_dir: str = DEFAULT_WSL_PROJECT_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None

    @field_validator("fetch_command", "build_command")
    @classmethod
    def _command_not_empty(cls, value: List[str]) -> List[str]:
        if not value or not value[0]:
            raise ValueError("command must name an executable")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @property
    def resources_dir(self) -> Path:
        """Directory holding the prebuilt archive."""
        return self.project_root / self.package_dir / RESOURCES_DIR_NAME

    @property
    def artifact_path(self) -> Path:
        """Expected location of the cached prebuilt archive."""
        return self.resources_dir / self.artifact_name

    def resolved_command(self, command: List[str]) -> List[str]:
        """
        Return command with relative script arguments anchored at project_root.

        The executable itself (first element) is left for PATH lookup.
        """
        resolved = [command[0]]
        for arg in command[1:]:
            path = Path(arg)
            if arg.lower().endswith(SCRIPT_SUFFIXES) and not path.is_absolute():
                resolved.append(str(self.project_root / path))
            else:
                resolved.append(arg)
        return resolved

    def fetcher_command(self) -> List[str]:
        return self.resolved_command(self.fetch_command)

    def builder_command(self) -> List[str]:
        return self.resolved_command(self.build_command)


# =============================================================================
# Loading
# =============================================================================


def _read_settings_file(path: Path) -> Dict[str, Any]:
    """Load a YAML settings file into a plain dict."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFileError(f"Cannot read settings file: {e}", file_path=path) from e
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
        raise ConfigFileError(f"Invalid YAML: {e}", file_path=path, line=line) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(
            "Settings file must contain a mapping at the top level",
            file_path=path,
        )
    return data


def _locate_settings_file(env: Mapping[str, str], project_root: Path) -> Optional[Path]:
    explicit = env.get(ENV_CONFIG_FILE)
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise ConfigFileError(
                "Settings file named by environment does not exist",
                file_path=path,
                suggestion=f"Unset {ENV_CONFIG_FILE} or point it at an existing file",
            )
        return path

    default = project_root / CONFIG_FILE_NAME
    if default.is_file():
        return default
    return None


def load_config(
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> DispatchConfig:
    """
    Build the DispatchConfig for this run.

    Args:
        env: Environment mapping (defaults to os.environ)
        cwd: Directory used as project root when nothing overrides it

    Returns:
        Validated DispatchConfig

    Raises:
        ConfigFileError: Settings file unreadable or not valid YAML
        ConfigValidationError: Settings values fail validation
    """
    env = os.environ if env is None else env
    base_root = Path(env.get(ENV_PROJECT_ROOT) or cwd or Path.cwd())

    values: Dict[str, Any] = {"project_root": base_root}
    source = "defaults"

    settings_file = _locate_settings_file(env, base_root)
    if settings_file is not None:
        file_values = _read_settings_file(settings_file)
        values.update(file_values)
        source = str(settings_file)
        # A relative project_root in the file is relative to the file itself
        if "project_root" in file_values:
            raw_root = file_values["project_root"]
            if not isinstance(raw_root, str):
                raise ConfigValidationError(
                    "project_root must be a path string",
                    field_path="project_root",
                    actual_value=raw_root,
                    source=source,
                )
            file_root = Path(raw_root)
            if not file_root.is_absolute():
                values["project_root"] = settings_file.parent / file_root

    # Environment wins over the settings file
    if env.get(ENV_PROJECT_ROOT):
        values["project_root"] = Path(env[ENV_PROJECT_ROOT])
    if env.get(ENV_LOG_LEVEL):
        values["log_level"] = env[ENV_LOG_LEVEL]
    if env.get(ENV_LOG_FILE):
        values["log_file"] = Path(env[ENV_LOG_FILE])

    try:
        config = DispatchConfig(**values)
    except ValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigValidationError(
            first.get("msg", "Invalid settings"),
            field_path=field_path or None,
            actual_value=first.get("input"),
            source=source,
        ) from e

    logging.getLogger("tracebuild.config").debug(
        "Loaded settings from %s (project_root=%s)", source, config.project_root
    )
    return config
