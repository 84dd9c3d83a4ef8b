import os
import shutil
import subprocess
from functools import lru_cache
from typing import Optional

import pydantic
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_REGISTRY = "ghcr.io/tmknom/dockerfiles"


def _git_toplevel(git: Optional[str]) -> Optional[str]:
    if not git:
        return None
    try:
        proc = subprocess.run(
            [git, "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None


class Settings(BaseSettings):
    """
    Manages all orchestration settings.
    Reads from environment variables (and .env file).

    Every field has a computed default and can be overridden by the
    caller's environment. Built once at startup and passed explicitly
    into each component.
    """

    # --- Paths & executables ---
    ROOT_DIR: Optional[str] = None
    DOCKER: Optional[str] = None
    GIT: Optional[str] = None

    # --- Sandbox ---
    DOCKER_WORK_DIR: str = "/work"
    DOCKER_USER: str = "1111:1111"
    PULL_ON_DEMAND: bool = False

    # --- Images ---
    REGISTRY: str = DEFAULT_REGISTRY
    HADOLINT: str = "hadolint/hadolint:latest"
    DOCKERFILELINT: str = "replicated/dockerfilelint:latest"
    PRETTIER: Optional[str] = None
    MARKDOWNLINT: Optional[str] = None
    YAMLLINT: Optional[str] = None
    ACTIONLINT: str = "rhysd/actionlint:latest"
    SHELLCHECK: str = "koalaman/shellcheck:stable"
    SHFMT: str = "mvdan/shfmt:latest"
    JSONLINT: Optional[str] = None

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    @pydantic.model_validator(mode="after")
    def _fill_computed_defaults(self) -> "Settings":
        """
        Resolve defaults that depend on the host or on other fields.
        """
        if not self.GIT:
            self.GIT = shutil.which("git")
        if not self.DOCKER:
            self.DOCKER = shutil.which("docker") or "docker"
        if not self.ROOT_DIR:
            self.ROOT_DIR = _git_toplevel(self.GIT) or os.getcwd()

        # Images hosted under the registry prefix
        registry = self.REGISTRY.rstrip("/")
        for field, image in (
            ("PRETTIER", "prettier"),
            ("MARKDOWNLINT", "markdownlint"),
            ("YAMLLINT", "yamllint"),
            ("JSONLINT", "jsonlint"),
        ):
            if not getattr(self, field):
                setattr(self, field, f"{registry}/{image}:latest")
        return self

    # Pydantic-Settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the Settings object.
    Using @lru_cache ensures the environment is read only once.
    """
    return Settings()
