"""tracebuild - Platform-aware build dispatcher for the lynx-trace UI bundle"""

from tracebuild.__version__ import __version__, __version_info__

from tracebuild.core.config import DispatchConfig, load_config
from tracebuild.core.detector import PlatformClass, detect_platform
from tracebuild.core.strategies import DispatchResult, dispatch


__all__ = [
    "DispatchConfig",
    "DispatchResult",
    "PlatformClass",
    "detect_platform",
    "dispatch",
    "load_config",
]
