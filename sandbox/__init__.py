from .fileset import resolve
from .invoker import SandboxInvoker
from .registry import ToolName, ToolRegistry, ToolSpec
from .profiles import SecurityProfile, ProfileKind, Mutability, NetworkMode
from .types import InvocationResult

__all__ = [
    "resolve",
    "SandboxInvoker",
    "ToolName",
    "ToolRegistry",
    "ToolSpec",
    "SecurityProfile",
    "ProfileKind",
    "Mutability",
    "NetworkMode",
    "InvocationResult",
]
