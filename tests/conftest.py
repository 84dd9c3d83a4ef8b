import os
import sys

import pytest

# Ensure project root is on sys.path so top-level packages (e.g., engine, sandbox) are importable
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from config.settings import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        ROOT_DIR=str(tmp_path),
        DOCKER="docker",
        GIT="git",
        _env_file=None,
    )
