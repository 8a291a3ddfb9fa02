import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'agent_actions' and tests/helpers as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from agent_actions.stdlib_logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path_factory, monkeypatch):
    """Keep the developer's HOME and AGENT_BROWSER_ACTIONS_* out of every test."""
    for key in list(os.environ):
        if key.startswith("AGENT_BROWSER_ACTIONS_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("USERPROFILE", raising=False)
    reset_logging_for_tests()
    yield
    reset_logging_for_tests()


@pytest.fixture
def home_dir() -> Path:
    return Path(os.environ["HOME"])


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    """An empty project directory used as the working directory."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return root
