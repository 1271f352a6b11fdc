"""
Collaborator Executor
=====================

Runs the external fetcher/builder scripts as child processes.

BEHAVIOR:
--------
- Synchronous: the dispatcher blocks until the child exits
- Inherited stdio: the child's progress output goes straight to the terminal
  (nothing is captured, so long builds stream their logs live)
- No timeout and no retry: a hung collaborator has to be interrupted by the
  user or the surrounding supervisor

FAILURE TRANSLATION:
-------------------
Every way a collaborator can fail ends up as a ProcessOutcome:

    child exits non-zero          -> returncode = child's code
    child killed by a signal      -> returncode < 0, exit code 1
    executable missing (OSError)  -> returncode = None
    other launch error            -> returncode = None

run_collaborator() never raises for these. Callers turn the outcome into a
process exit code via ProcessOutcome.exit_code, which falls back to 1 when
no numeric code is available.
"""

import logging
import subprocess
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger("tracebuild.executor")


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class ProcessOutcome:
    """
    Result of invoking a collaborator.

    FIELDS:
    - success: Did the child exit 0?
    - returncode: Child exit code, None if it never ran
    - error: Failure description, None on success
    - command: The argv that was run
    - duration_seconds: Wall time spent waiting on the child
    """
    success: bool
    returncode: Optional[int] = None
    error: Optional[str] = None
    command: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def exit_code(self) -> int:
        """Exit code this process should use for the outcome."""
        if self.success:
            return 0
        # Negative codes mean the child was killed by a signal: no status to forward
        if isinstance(self.returncode, int) and self.returncode > 0:
            return self.returncode
        return 1

    def __str__(self) -> str:
        name = self.command[0] if self.command else "<none>"
        if self.success:
            return f"{name}: ok in {self.duration_seconds:.1f}s"
        return f"{name}: FAILED ({self.error})"


# =============================================================================
# Execution
# =============================================================================


def run_collaborator(command: List[str], cwd: Optional[Path] = None) -> ProcessOutcome:
    """
    Run a collaborator and wait for it to finish.

    Args:
        command: argv list, executable first
        cwd: Working directory for the child (defaults to ours)

    Returns:
        ProcessOutcome describing what happened
    """
    logger.debug("Running collaborator: %s (cwd=%s)", command, cwd)
    # The child writes to the same descriptors; our buffered banners go first
    sys.stdout.flush()
    sys.stderr.flush()
    start_time = time.time()

    try:
        result = subprocess.run(command, cwd=cwd)
    except FileNotFoundError as e:
        outcome = ProcessOutcome(
            success=False,
            error=f"Executable not found: {e.filename or command[0]}",
            command=list(command),
            duration_seconds=time.time() - start_time,
        )
        logger.error("%s", outcome)
        return outcome
    except (OSError, subprocess.SubprocessError) as e:
        outcome = ProcessOutcome(
            success=False,
            returncode=getattr(e, "returncode", None),
            error=str(e),
            command=list(command),
            duration_seconds=time.time() - start_time,
        )
        logger.error("%s", outcome)
        return outcome

    duration = time.time() - start_time

    if result.returncode == 0:
        outcome = ProcessOutcome(
            success=True,
            returncode=0,
            command=list(command),
            duration_seconds=duration,
        )
        logger.info("%s", outcome)
        return outcome

    outcome = ProcessOutcome(
        success=False,
        returncode=result.returncode,
        error=_describe_returncode(result.returncode),
        command=list(command),
        duration_seconds=duration,
    )
    logger.warning("%s", outcome)
    return outcome


def _describe_returncode(returncode: int) -> str:
    if returncode < 0:
        return f"Killed by signal {-returncode}"
    return f"Exit code {returncode}"
