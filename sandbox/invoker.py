from typing import List, Sequence, Set

from .exceptions import ImageUnavailable, RuntimeMissing
from .profiles import SecurityProfile
from .registry import ToolSpec
from .types import InvocationResult
from .utils import get_logger, run_subprocess

log = get_logger("sandbox.invoker")


class SandboxInvoker:
    """
    Runs registered tools inside throwaway containers.

    Pulling is explicit: call ensure_available() (the `install` task)
    before invoking, unless PULL_ON_DEMAND is enabled.
    """

    def __init__(self, settings):
        self.docker: str = settings.DOCKER
        self.root: str = settings.ROOT_DIR
        self.pull_on_demand: bool = settings.PULL_ON_DEMAND
        self._available: Set[str] = set()

    # -------------------------
    # Image management
    # -------------------------

    def ensure_available(self, spec: ToolSpec) -> InvocationResult:
        """Pulls the tool image. Raises ImageUnavailable if the pull fails."""
        log.info(f"Pulling {spec.image}")
        result = self._run([self.docker, "pull", spec.image])
        if not result.ok:
            raise ImageUnavailable(spec.image, result.output)
        self._available.add(spec.image)
        return result

    def check_available(self, spec: ToolSpec) -> InvocationResult:
        """Inspects the local image store; the result carries docker's output on failure."""
        if spec.image in self._available:
            return InvocationResult(exit_code=0)
        result = self._run([self.docker, "image", "inspect", "--format", "{{.Id}}", spec.image])
        if result.ok:
            self._available.add(spec.image)
        return result

    def is_available(self, spec: ToolSpec) -> bool:
        return self.check_available(spec).ok

    # -------------------------
    # Invocation
    # -------------------------

    def build_command(
        self,
        spec: ToolSpec,
        profile: SecurityProfile,
        args: Sequence[str] = (),
    ) -> List[str]:
        cmd = [
            self.docker, "run", "--rm",
            "--pull", "missing" if self.pull_on_demand else "never",
            "-v", profile.mount_spec(self.root),
            "-w", profile.work_dir,
        ]
        cmd.extend(profile.docker_options())
        cmd.append(spec.image)
        cmd.extend(spec.base_args)
        cmd.extend(args)
        return cmd

    def invoke(
        self,
        spec: ToolSpec,
        profile: SecurityProfile,
        args: Sequence[str] = (),
    ) -> InvocationResult:
        """
        Runs the tool synchronously and returns its exit code verbatim.
        """
        if not self.pull_on_demand:
            available = self.check_available(spec)
            if not available.ok:
                raise ImageUnavailable(spec.image, available.output)

        cmd = self.build_command(spec, profile, args)
        log.info(f"Running {spec.name.value} ({profile.workspace.name.lower()} workspace)")
        return self._run(cmd)

    def _run(self, cmd: List[str]) -> InvocationResult:
        try:
            proc = run_subprocess(cmd)
        except FileNotFoundError:
            raise RuntimeMissing(cmd[0]) from None
        return InvocationResult(
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            command=tuple(cmd),
        )
