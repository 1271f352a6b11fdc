"""
Dispatcher core: platform detection, artifact cache inspection, collaborator
execution and the build strategies.

Layering (each module only imports the ones above it):

    config     constants and DispatchConfig
    detector   PlatformClass, detect_platform()
    artifact   ArtifactCacheEntry, inspect_artifact()
    executor   ProcessOutcome, run_collaborator()
    strategies fetch_prebuilt(), build_from_source(), STRATEGIES, dispatch()
"""

from .artifact import ArtifactCacheEntry, format_size_mb, inspect_artifact
from .config import DispatchConfig, load_config
from .detector import PlatformClass, detect_platform, get_platform_name
from .executor import ProcessOutcome, run_collaborator
from .strategies import (
    STRATEGIES,
    DispatchResult,
    build_from_source,
    dispatch,
    fetch_prebuilt,
)

__all__ = [
    "ArtifactCacheEntry",
    "format_size_mb",
    "inspect_artifact",
    "DispatchConfig",
    "load_config",
    "PlatformClass",
    "detect_platform",
    "get_platform_name",
    "ProcessOutcome",
    "run_collaborator",
    "STRATEGIES",
    "DispatchResult",
    "build_from_source",
    "dispatch",
    "fetch_prebuilt",
]
