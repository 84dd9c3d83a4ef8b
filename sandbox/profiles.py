from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class Mutability(str, Enum):
    READ_ONLY = "ro"
    READ_WRITE = "rw"


class NetworkMode(str, Enum):
    NONE = "none"
    HOST = "host"


class ProfileKind(str, Enum):
    """Which stock profile a tool step runs under."""

    ISOLATED = "isolated"
    FORMATTING = "formatting"


DEFAULT_WORK_DIR = "/work"
DEFAULT_USER = "1111:1111"


@dataclass(frozen=True)
class SecurityProfile:
    """
    Isolation parameters applied to one sandboxed invocation.

    workspace controls whether the mounted root can be written to.
    The container's own root filesystem stays read-only either way.
    """

    work_dir: str = DEFAULT_WORK_DIR
    workspace: Mutability = Mutability.READ_ONLY
    read_only_rootfs: bool = True
    cap_drop: Tuple[str, ...] = ("all",)
    no_new_privileges: bool = True
    network: NetworkMode = NetworkMode.NONE
    user: str = DEFAULT_USER

    def mount_spec(self, root: str) -> str:
        spec = f"{root}:{self.work_dir}"
        if self.workspace is Mutability.READ_ONLY:
            spec += ":ro"
        return spec

    def docker_options(self) -> List[str]:
        opts = ["--user", self.user]
        if self.read_only_rootfs:
            opts.append("--read-only")
        if self.no_new_privileges:
            opts.extend(["--security-opt", "no-new-privileges"])
        for cap in self.cap_drop:
            opts.extend(["--cap-drop", cap])
        opts.extend(["--network", self.network.value])
        return opts


def isolated(work_dir: str = DEFAULT_WORK_DIR, user: str = DEFAULT_USER) -> SecurityProfile:
    """Lint profile: no network, no capabilities, read-only workspace."""
    return SecurityProfile(work_dir=work_dir, user=user)


def formatting(work_dir: str = DEFAULT_WORK_DIR, user: str = DEFAULT_USER) -> SecurityProfile:
    """Format profile: same as isolated but the workspace is writable."""
    return SecurityProfile(work_dir=work_dir, user=user, workspace=Mutability.READ_WRITE)


def for_kind(kind: ProfileKind, work_dir: str = DEFAULT_WORK_DIR, user: str = DEFAULT_USER) -> SecurityProfile:
    if kind is ProfileKind.FORMATTING:
        return formatting(work_dir, user)
    return isolated(work_dir, user)
