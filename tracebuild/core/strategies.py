"""
Build Strategies
================

The two mutually exclusive ways to get the trace UI bundle in place:

    WINDOWS -> fetch_prebuilt()     download the released archive
    UNIX    -> build_from_source()  run the local build pipeline

STRATEGIES maps each PlatformClass to its strategy. dispatch() runs exactly
one entry; the other collaborator is never touched.

EXIT AND FOOTER RULES:
---------------------
Each strategy returns a DispatchResult instead of exiting, so the strategies
can be tested without a process boundary. The entry point then prints the
closing banner only when show_footer is set and exits with exit_code.

    cache hit           -> exit 0, no footer (early return)
    collaborator ok     -> exit 0, footer
    collaborator failed -> collaborator's code (or 1), no footer

The cache-hit path skipping the footer mirrors the failure paths, which also
end the run before the closing banner.

ERROR HANDLING:
--------------
Each strategy body is wrapped in a single try/except. Whatever goes wrong
(stat failure, launch failure, anything unexpected) is logged and reported
as a failure with a deliberate exit code. Nothing propagates to the caller.
"""

import logging
from typing import Callable, Dict, NamedTuple

from ..utils import console
from .artifact import inspect_artifact
from .config import (
    PREBUILT_SOURCE_REPO,
    RESOURCES_DIR_NAME,
    WINDOWS_BUILD_REASON,
    WSL_BUILD_COMMAND,
    DispatchConfig,
)
from .detector import PlatformClass, describe_platform
from .executor import ProcessOutcome, run_collaborator


logger = logging.getLogger("tracebuild.strategies")


class DispatchResult(NamedTuple):
    """
    What the entry point should do after a strategy ran.

    FIELDS:
    - exit_code: Process exit code (0 = success)
    - show_footer: Print the closing banner before exiting?
    """
    exit_code: int
    show_footer: bool = False


def _exit_code_from_exception(error: BaseException) -> int:
    """Use a numeric code attached to the error if there is one, else 1."""
    code = getattr(error, "returncode", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# =============================================================================
# Windows: Prebuilt Archive
# =============================================================================


def fetch_prebuilt(config: DispatchConfig) -> DispatchResult:
    """
    Make sure the prebuilt archive is present, downloading it if needed.

    An existing archive is reused as-is; refreshing it is an explicit user
    action (config.refresh_hint).
    """
    console.print_line(
        f"📦 {describe_platform(PlatformClass.WINDOWS)} platform detected, using prebuilt binaries..."
    )
    console.print_line()
    console.print_line(f"ℹ️  Reason: {WINDOWS_BUILD_REASON}")
    console.print_line(f"ℹ️  Solution: Downloading prebuilt artifacts from {PREBUILT_SOURCE_REPO}")
    console.print_line()

    try:
        entry = inspect_artifact(config.artifact_path)

        if entry.exists:
            logger.info("Cache hit: %s (%d bytes)", entry.path, entry.size_bytes)
            console.print_success("✅ Found existing prebuilt binary:")
            console.print_line(f"   Path: {entry.path}")
            console.print_line(f"   Size: {entry.size_display}")
            console.print_line(f"   Modified: {entry.modified_display}")
            console.print_line()
            console.print_hint("💡 Using existing binary. To update, run:")
            console.print_hint(f"   {config.refresh_hint}")
            console.print_line()
            return DispatchResult(exit_code=0, show_footer=False)

        console.print_line("⬇️  Downloading prebuilt binary...")
        console.print_line()
        outcome = run_collaborator(config.fetcher_command(), cwd=config.project_root)

    except Exception as e:
        logger.exception("Prebuilt fetch aborted: %s", e)
        _print_fetch_failure(config)
        return DispatchResult(exit_code=_exit_code_from_exception(e))

    if not outcome.success:
        _print_fetch_failure(config)
        return DispatchResult(exit_code=outcome.exit_code)

    console.print_line()
    console.print_success("✅ Lynx-trace setup completed for Windows platform!")
    console.print_line()
    return DispatchResult(exit_code=0, show_footer=True)


def _print_fetch_failure(config: DispatchConfig) -> None:
    """Error banner plus the manual recovery procedure, on stderr."""
    resources_rel = f"{config.package_dir.rstrip('/')}/{RESOURCES_DIR_NAME}/"

    console.print_error()
    console.print_error("❌ Failed to download prebuilt binary!")
    console.print_error()
    console.print_error_detail("🔧 Manual resolution steps:")
    console.print_error_detail(f"   1. Visit {config.releases_url}")
    console.print_error_detail(f"   2. Download the latest {config.release_asset_pattern}")
    console.print_error_detail(f"   3. Rename it to {config.artifact_name}")
    console.print_error_detail(f"   4. Place it in {resources_rel}")
    console.print_error_detail()
    console.print_error_detail("Alternative: Build locally using WSL2:")
    console.print_error_detail("   wsl")
    console.print_error_detail(f"   cd {config.wsl_project_dir}")
    console.print_error_detail(f"   {WSL_BUILD_COMMAND}")
    console.print_error_detail()


# =============================================================================
# macOS / Linux: Source Build
# =============================================================================


def build_from_source(config: DispatchConfig) -> DispatchResult:
    """Run the local build pipeline."""
    console.print_line(
        f"🔨 {describe_platform(PlatformClass.UNIX)} platform detected, building from source..."
    )
    console.print_line()

    try:
        outcome: ProcessOutcome = run_collaborator(
            config.builder_command(), cwd=config.project_root
        )
    except Exception as e:
        logger.exception("Source build aborted: %s", e)
        _print_build_failure()
        return DispatchResult(exit_code=_exit_code_from_exception(e))

    if not outcome.success:
        _print_build_failure()
        return DispatchResult(exit_code=outcome.exit_code)

    console.print_line()
    console.print_success("✅ Lynx-trace build completed successfully!")
    console.print_line()
    return DispatchResult(exit_code=0, show_footer=True)


def _print_build_failure() -> None:
    console.print_error()
    console.print_error("❌ Build failed!")
    console.print_error()
    console.print_error_detail("Please check the error messages above and retry.")
    console.print_error_detail()


# =============================================================================
# Dispatch Table
# =============================================================================

Strategy = Callable[[DispatchConfig], DispatchResult]

STRATEGIES: Dict[PlatformClass, Strategy] = {
    PlatformClass.WINDOWS: fetch_prebuilt,
    PlatformClass.UNIX: build_from_source,
}


def dispatch(platform_class: PlatformClass, config: DispatchConfig) -> DispatchResult:
    """Run the strategy registered for platform_class."""
    strategy = STRATEGIES[platform_class]
    logger.debug("Dispatching %s to %s", platform_class.value, strategy.__name__)
    return strategy(config)
