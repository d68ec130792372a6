"""Thin wrapper around ``subprocess.run`` for the external services."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import Final

from autoredshift.errors import ExternalCommandError

logger: Final = logging.getLogger(__name__)

DEFAULT_TIMEOUT: Final = 10.0


def run_command(command: Sequence[str], timeout: float = DEFAULT_TIMEOUT) -> str:
    """Run a command and return its standard output.

    Args:
        command: argv to execute (no shell)
        timeout: Seconds to wait before giving up

    Returns:
        Captured stdout as text

    Raises:
        ExternalCommandError: If the program is missing, exits non-zero or times out
    """
    logger.debug("exec: %s", " ".join(command))
    try:
        result = subprocess.run(
            list(command),
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as exc:
        raise ExternalCommandError(
            command,
            f"exited with status {exc.returncode}",
            stderr=(exc.stderr or "").strip(),
            original_error=exc,
        ) from exc
    except FileNotFoundError as exc:
        raise ExternalCommandError(command, "command not found", original_error=exc) from exc
    except subprocess.TimeoutExpired as exc:
        raise ExternalCommandError(
            command, f"timed out after {timeout:g}s", original_error=exc
        ) from exc

    return result.stdout
