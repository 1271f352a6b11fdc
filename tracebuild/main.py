#!/usr/bin/env python3
"""
Platform-aware build strategy selector for lynx-trace.

- Windows: uses the prebuilt archive (downloaded from GitHub releases)
- macOS/Linux: builds from source locally

Takes no arguments. Behavior is determined by the host platform and the
optional tracebuild.yaml / TRACEBUILD_* environment settings.
"""

import logging
import sys

from tracebuild.core.config import BANNER_RULE, BANNER_TITLE, DispatchConfig, load_config
from tracebuild.core.detector import detect_platform, get_platform_name
from tracebuild.core.strategies import DispatchResult, dispatch
from tracebuild.errors import ConfigError
from tracebuild.utils import console
from tracebuild.utils.logger import setup_logger


def print_header(platform_name: str) -> None:
    console.print_line()
    console.print_banner(BANNER_RULE)
    console.print_banner(BANNER_TITLE)
    console.print_banner(BANNER_RULE)
    console.print_line(f"Platform: {platform_name}")
    console.print_line()


def print_footer() -> None:
    console.print_banner(BANNER_RULE)
    console.print_line()


def run(config: DispatchConfig) -> DispatchResult:
    """Detect the platform, print the header and run the matching strategy."""
    logger = logging.getLogger("tracebuild")

    platform_class = detect_platform()
    platform_name = get_platform_name()
    logger.info("Detected platform %s (%s)", platform_name, platform_class.value)

    print_header(platform_name)
    result = dispatch(platform_class, config)

    if result.show_footer:
        print_footer()

    logger.debug("Dispatcher finished with exit code %d", result.exit_code)
    return result


def main() -> None:
    """Entry point. Always terminates the process with an explicit exit code."""
    console.setup_console()

    try:
        config = load_config()
    except ConfigError as e:
        console.print_error(f"❌ Invalid tracebuild settings: {e}")
        sys.exit(1)

    setup_logger(log_level=config.log_level, log_file=config.log_file)

    result = run(config)
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
