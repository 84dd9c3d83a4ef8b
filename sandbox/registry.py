# sandbox/registry.py

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

from .exceptions import UnknownTool
from .profiles import ProfileKind


class ToolName(str, Enum):
    """Closed set of supported sandboxed tools."""

    HADOLINT = "hadolint"
    DOCKERFILELINT = "dockerfilelint"
    PRETTIER = "prettier"
    MARKDOWNLINT = "markdownlint"
    YAMLLINT = "yamllint"
    ACTIONLINT = "actionlint"
    SHELLCHECK = "shellcheck"
    SHFMT = "shfmt"
    JSONLINT = "jsonlint"


@dataclass(frozen=True)
class ToolSpec:
    """
    Static description of a sandboxed tool.

    image is pinned per tool (name:tag) and only checked when the
    image is pulled or invoked.
    """

    name: ToolName
    image: str
    base_args: Tuple[str, ...] = ()
    pattern: Optional[str] = None
    profile: ProfileKind = ProfileKind.ISOLATED


# name -> (settings field holding the image, base args, default glob)
_TOOL_TABLE = (
    (ToolName.HADOLINT, "HADOLINT", ("hadolint",), "**/Dockerfile"),
    (ToolName.DOCKERFILELINT, "DOCKERFILELINT", (), "**/Dockerfile"),
    (ToolName.PRETTIER, "PRETTIER", (), None),
    (ToolName.MARKDOWNLINT, "MARKDOWNLINT", (), "**/*.md"),
    (ToolName.YAMLLINT, "YAMLLINT", (), None),
    (ToolName.ACTIONLINT, "ACTIONLINT", (), None),
    (ToolName.SHELLCHECK, "SHELLCHECK", (), "**/*.sh"),
    (ToolName.SHFMT, "SHFMT", (), None),
    (ToolName.JSONLINT, "JSONLINT", (), "**/*.json"),
)


class ToolRegistry:
    """
    Immutable tool table, fully populated at construction.

    Upgrading a tool means editing its image reference in the
    settings, not registering anything at runtime.
    """

    __slots__ = ("_tools",)

    def __init__(self, settings):
        tools = {}
        for name, field, base_args, pattern in _TOOL_TABLE:
            tools[name] = ToolSpec(
                name=name,
                image=getattr(settings, field),
                base_args=base_args,
                pattern=pattern,
            )
        self._tools: Mapping[ToolName, ToolSpec] = MappingProxyType(tools)

    def lookup(self, name: Union[ToolName, str]) -> ToolSpec:
        try:
            key = ToolName(name)
        except ValueError:
            raise UnknownTool(name) from None
        return self._tools[key]

    def has(self, name: Union[ToolName, str]) -> bool:
        try:
            ToolName(name)
        except ValueError:
            return False
        return True

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
