"""Test configuration and fixtures."""

import hashlib
import io
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

import pytest
from git import Actor, Repo

from pruner.backend import RawBranch
from pruner.errors import BackendError
from pruner.terminal import Terminal

AUTHOR = Actor("Test User", "test@example.com")

# Raw git dates, "<seconds> <offset>"
MAIN_DATE = "1577836800 +0000"  # 2020-01-01 00:00:00
BRANCH_DATES = {
    "feature/new": "1609459200 +0530",  # 2021-01-01 05:30:00 local
    "feature/old": "1262304000 +0100",  # 2010-01-01 01:00:00 local
    "feature/middle": "1420070400 -0500",  # 2014-12-31 19:00:00 local
}


def commit_file(repo: Repo, name: str, date: str) -> None:
    """Commit a file named after ``name`` with a fixed date."""
    work_tree = Path(repo.working_tree_dir)
    test_file = work_tree / f"{name}.txt"
    test_file.parent.mkdir(parents=True, exist_ok=True)
    test_file.write_text(f"{name} content")
    repo.index.add([f"{name}.txt"])
    repo.index.commit(f"Add {name}", author=AUTHOR, committer=AUTHOR, author_date=date, commit_date=date)


def init_repo(path: Path) -> Repo:
    """Create a repository whose only branch is ``main`` with one commit."""
    path.mkdir()
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "name", AUTHOR.name).release()
    repo.config_writer().set_value("user", "email", AUTHOR.email).release()
    commit_file(repo, "README", MAIN_DATE)
    # Whatever init.defaultBranch says, call it main
    repo.git.branch("-M", "main")
    return repo


@pytest.fixture
def test_repo(tmp_path: Path) -> Path:
    """Create a repository with dated feature branches.

    Branches, oldest local commit time first: feature/old, feature/middle,
    main (current), feature/new. There is also a master branch at the
    initial commit.
    """
    local_path = tmp_path / "local"
    repo = init_repo(local_path)
    main_branch = repo.heads.main
    repo.create_head("master")

    for name, date in BRANCH_DATES.items():
        main_branch.checkout()
        repo.create_head(name).checkout()
        commit_file(repo, name, date)

    main_branch.checkout()
    return local_path


def make_raw_branch(name: str, seconds: int, offset_minutes: int = 0, is_head: bool = False) -> RawBranch:
    """Build a branch record with a made up commit id derived from the name."""
    return RawBranch(
        name=name.encode("utf-8"),
        is_head=is_head,
        commit_id=hashlib.sha1(name.encode("utf-8")).hexdigest(),
        committed_date=seconds,
        offset_minutes=offset_minutes,
        handle=name,
    )


class FakeBackend:
    """In-memory repository keyed by branch name."""

    def __init__(self, *branches: RawBranch) -> None:
        self.branches: dict[Any, RawBranch] = {branch.handle: branch for branch in branches}
        self.commits: dict[str, RawBranch] = {branch.commit_id: branch for branch in branches}

    def local_branches(self) -> list[RawBranch]:
        return list(self.branches.values())

    def delete_branch(self, handle: Any) -> None:
        if handle not in self.branches:
            raise BackendError(f"No branch {handle}")
        del self.branches[handle]

    def find_commit(self, commit_id: str) -> RawBranch:
        try:
            return self.commits[commit_id]
        except KeyError as err:
            raise BackendError(f"No commit {commit_id}") from err

    def create_branch(self, name: str, commit: RawBranch) -> None:
        if name in self.branches:
            raise BackendError(f"Branch {name} already exists")
        self.branches[name] = replace(commit, name=name.encode("utf-8"), is_head=False, handle=name)


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Backend with three branches plus master and a current branch.

    Order by commit time: old, middle, current, new.
    """
    return FakeBackend(
        make_raw_branch("new", 1609459200),
        make_raw_branch("master", 1000),
        make_raw_branch("old", 1262304000),
        make_raw_branch("current", 1500000000, is_head=True),
        make_raw_branch("middle", 1420070400),
    )


@pytest.fixture
def make_terminal() -> Callable[[str], Terminal]:
    """Create a terminal that reads the given keys and records output."""

    def factory(keys: str) -> Terminal:
        return Terminal(io.BytesIO(keys.encode("latin-1")), io.StringIO())

    return factory
