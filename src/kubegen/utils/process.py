"""External process helpers."""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional

from kubegen.errors import ProcessError


logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result from running a command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""


def run_command(
    cmd: List[str],
    check: bool = True,
    capture_output: bool = True,
    input: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> CommandResult:
    """Run a command and block until it exits.

    ``env`` entries are layered over the current process environment. A
    keyboard interrupt while waiting is turned into a ``ProcessError``.
    """
    logger.debug(f"Running command: {' '.join(cmd)}")

    process_env = None
    if env:
        process_env = os.environ.copy()
        process_env.update(env)

    try:
        completed = subprocess.run(
            cmd,
            input=input,
            capture_output=capture_output,
            text=True,
            env=process_env,
        )
    except KeyboardInterrupt as e:
        raise ProcessError(f"Interrupted while running {' '.join(cmd[:2])}") from e

    result = CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )

    if check and completed.returncode != 0:
        error = subprocess.CalledProcessError(
            completed.returncode, cmd
        )
        error.stdout = result.stdout
        error.stderr = result.stderr
        raise error

    return result
