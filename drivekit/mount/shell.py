"""External command execution for mount tooling.

Every mount, unmount and probe tool is run through CommandRunner so the
fallback chains can be exercised in tests with a scripted fake.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger("drivekit.shell")

DEFAULT_TIMEOUT = 30

# Arguments that follow these flags are never logged
_SECRET_FLAGS = ("password=",)


@dataclass
class CommandResult:
    """Outcome of one external command invocation."""
    args: List[str]
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    missing: bool = False
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """True if the command ran and exited with status 0."""
        return self.returncode == 0

    @property
    def program(self) -> str:
        """Name of the executed program."""
        return self.args[0] if self.args else ""

    @property
    def error_message(self) -> str:
        """Trimmed stderr, or a description of why the command did not run."""
        if self.stderr.strip():
            return self.stderr.strip()
        if self.missing:
            return f"{self.program} is not installed"
        if self.timed_out:
            return f"{self.program} timed out"
        return f"{self.program} exited with status {self.returncode}"


def redact_args(args: Sequence[str], secrets: Sequence[str] = ()) -> str:
    """
    Render a command line for logging with secrets masked.

    Args:
        args: Command and arguments
        secrets: Literal values (e.g. passwords) to mask wherever they appear

    Returns:
        Space-joined command line safe to log
    """
    rendered = []
    for arg in args:
        for secret in secrets:
            if secret:
                arg = arg.replace(secret, "[REDACTED]")
        for flag in _SECRET_FLAGS:
            if flag in arg:
                head, _, _ = arg.partition(flag)
                arg = f"{head}{flag}[REDACTED]"
        rendered.append(arg)
    return " ".join(rendered)


class CommandRunner:
    """Runs external tools synchronously with a bounded wait."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize the runner.

        Args:
            timeout: Seconds to wait for each command before giving up
        """
        self._timeout = timeout

    @property
    def timeout(self) -> int:
        """Per-command timeout in seconds."""
        return self._timeout

    def run(
        self,
        args: List[str],
        input_text: Optional[str] = None,
        secrets: Sequence[str] = ()
    ) -> CommandResult:
        """
        Run a command and capture its output.

        Args:
            args: Command and arguments as list
            input_text: Optional text written to the child's stdin
            secrets: Values to mask when logging the command line

        Returns:
            CommandResult; a missing executable or a timeout is reported
            in the result rather than raised. Output bytes that are not
            valid UTF-8 are replaced rather than raised
        """
        logger.debug(f"Running command: {redact_args(args, secrets)}")

        try:
            completed = subprocess.run(
                args,
                input=input_text,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout,
            )
        except FileNotFoundError:
            logger.debug(f"Command not found: {args[0]}")
            return CommandResult(args=list(args), missing=True)
        except subprocess.TimeoutExpired:
            message = f"{args[0]} timed out after {self._timeout} seconds"
            logger.warning(message)
            return CommandResult(args=list(args), stderr=message, timed_out=True)
        except OSError as e:
            logger.warning(f"Could not run {args[0]}: {e}")
            return CommandResult(args=list(args), stderr=str(e), missing=True)

        result = CommandResult(
            args=list(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if result.ok:
            logger.debug(f"{args[0]} succeeded")
        else:
            logger.debug(f"{args[0]} failed ({result.returncode}): {result.stderr.strip()}")

        return result
