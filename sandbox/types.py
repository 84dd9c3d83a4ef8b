from dataclasses import dataclass, field
from typing import Tuple


# -------------------------------------------------
# Sandboxed command result (canonical, in-memory)
# -------------------------------------------------

@dataclass(frozen=True)
class InvocationResult:
    """
    Outcome of one sandboxed command.

    exit_code is the container's exit code, never interpreted
    beyond zero / non-zero.
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    command: Tuple[str, ...] = field(default=())

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        return self.stdout + self.stderr
