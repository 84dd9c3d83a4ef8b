from unittest.mock import patch

from config.settings import DEFAULT_REGISTRY, Settings
from tests.fakes import completed


def test_environment_overrides_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("ROOT_DIR", str(tmp_path))
    monkeypatch.setenv("DOCKER", "/usr/local/bin/podman")
    monkeypatch.setenv("PRETTIER", "example.com/prettier:3.3.3")
    monkeypatch.setenv("PULL_ON_DEMAND", "true")

    settings = Settings(_env_file=None)

    assert settings.ROOT_DIR == str(tmp_path)
    assert settings.DOCKER == "/usr/local/bin/podman"
    assert settings.PRETTIER == "example.com/prettier:3.3.3"
    assert settings.PULL_ON_DEMAND is True


def test_registry_prefixed_images_follow_registry(monkeypatch, tmp_path):
    monkeypatch.setenv("REGISTRY", "ghcr.io/acme/images")

    settings = Settings(ROOT_DIR=str(tmp_path), _env_file=None)

    assert settings.MARKDOWNLINT == "ghcr.io/acme/images/markdownlint:latest"
    assert settings.JSONLINT == "ghcr.io/acme/images/jsonlint:latest"
    assert settings.HADOLINT == "hadolint/hadolint:latest"


def test_sandbox_defaults(tmp_path):
    settings = Settings(ROOT_DIR=str(tmp_path), _env_file=None)

    assert settings.REGISTRY == DEFAULT_REGISTRY
    assert settings.DOCKER_WORK_DIR == "/work"
    assert settings.DOCKER_USER == "1111:1111"
    assert settings.PULL_ON_DEMAND is False
    assert settings.DOCKER


def test_root_dir_defaults_to_git_toplevel(monkeypatch):
    monkeypatch.delenv("ROOT_DIR", raising=False)

    with patch("config.settings.subprocess.run", return_value=completed(0, stdout="/src/project\n")) as run:
        settings = Settings(GIT="git", _env_file=None)

    assert settings.ROOT_DIR == "/src/project"
    assert run.call_args[0][0] == ["git", "rev-parse", "--show-toplevel"]


def test_root_dir_falls_back_to_cwd_outside_git(monkeypatch, tmp_path):
    monkeypatch.delenv("ROOT_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    with patch("config.settings.subprocess.run", return_value=completed(128, stderr="not a git repository")):
        settings = Settings(GIT="git", _env_file=None)

    assert settings.ROOT_DIR == str(tmp_path)
