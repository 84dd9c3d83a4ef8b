class SandboxError(Exception):
    """Base class for sandboxed execution errors."""


class InvalidRoot(SandboxError):
    """Raised when the workspace root is missing or not a directory."""

    def __init__(self, root):
        super().__init__(f"Root directory does not exist: {root}")
        self.root = root


class UnknownTool(SandboxError):
    """Raised on a tool registry miss."""

    def __init__(self, name):
        super().__init__(f"No tool registered under name: {name}")
        self.name = name


class ImageUnavailable(SandboxError):
    """Raised when a tool image is not present locally and was not pulled."""

    def __init__(self, image: str, output: str = ""):
        super().__init__(f"Image not available: {image}")
        self.image = image
        self.output = output


class RuntimeMissing(SandboxError):
    """Raised when the container runtime binary cannot be executed."""

    def __init__(self, binary):
        super().__init__(
            f"Container runtime not found: {binary!r}. "
            "Install docker or set DOCKER to its path."
        )
        self.binary = binary


class ToolExecutionFailed(SandboxError):
    """
    Non-zero exit from a sandboxed command.

    Carries the exit code verbatim together with the captured output.
    """

    def __init__(self, task: str, exit_code: int, output: str = ""):
        super().__init__(f"Task '{task}' failed with exit code {exit_code}")
        self.task = task
        self.exit_code = exit_code
        self.output = output
