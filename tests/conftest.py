import shutil
import subprocess
import time
from collections import Counter
from pathlib import Path
from typing import Optional

import pytest
from hypothesis import settings

from gitversion_core import GitAccessError, reset_resolvers
from gitversion_core.config import CONFIG_ENV_VAR

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("gitversion-tests", database=None)
settings.load_profile("gitversion-tests")

HEAD_ID = "c1234567ab" + "0" * 30


class StubGit:
    """Call-counting stand-in for GitAdapter."""

    def __init__(
        self,
        description: Optional[str] = "v1.2.0-2-gc1234567",
        clean: bool = True,
        head: str = HEAD_ID,
        describe_error: bool = False,
        status_error: bool = False,
        head_error: bool = False,
        delay: float = 0.0,
    ) -> None:
        self.description = description
        self.clean = clean
        self.head = head
        self.describe_error = describe_error
        self.status_error = status_error
        self.head_error = head_error
        self.delay = delay
        self.calls: Counter = Counter()
        self.hints = []

    def describe(self, hint=None):
        self.calls["describe"] += 1
        self.hints.append(hint)
        time.sleep(self.delay)
        if self.describe_error:
            raise GitAccessError("describe exploded")
        return self.description

    def is_clean(self):
        self.calls["is_clean"] += 1
        if self.status_error:
            raise GitAccessError("status exploded")
        return self.clean

    def resolve_head(self):
        self.calls["resolve_head"] += 1
        time.sleep(self.delay)
        if self.head_error:
            raise GitAccessError("fatal: Needed a single revision")
        return self.head

    def abbreviate(self, object_id, length):
        self.calls["abbreviate"] += 1
        return object_id[:length]


@pytest.fixture(autouse=True)
def _fresh_resolvers(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_resolvers()
    yield
    reset_resolvers()


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """A directory that looks like a repository root (marker only)."""
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def stub_git():
    """Build a StubGit and a factory handing it out."""

    def _make(**kwargs):
        stub = StubGit(**kwargs)
        return stub, (lambda root, config: stub)

    return _make


def run_git(repo: Path, *args: str) -> str:
    return subprocess.run(
        [
            "git",
            "-c", "user.name=Test",
            "-c", "user.email=test@example.com",
            "-c", "commit.gpgsign=false",
            "-c", "tag.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    ).stdout.strip()


def commit(repo: Path, name: str) -> str:
    (repo / name).write_text(name, encoding="utf-8")
    run_git(repo, "add", name)
    run_git(repo, "commit", "-q", "-m", f"add {name}")
    return run_git(repo, "rev-parse", "HEAD")


class RepoOps:
    """Small helper around a real repository used by integration tests."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def git(self, *args: str) -> str:
        return run_git(self.root, *args)

    def commit(self, name: str) -> str:
        return commit(self.root, name)

    def tag(self, name: str) -> None:
        self.git("tag", "-a", name, "-m", name)


@pytest.fixture
def git_repo(tmp_path: Path) -> RepoOps:
    """An empty real git repository."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    return RepoOps(repo)
