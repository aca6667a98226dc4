"""Local branch enumeration."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from pruner.backend import BranchBackend, RawBranch
from pruner.errors import EncodingError

logger = logging.getLogger(__name__)

IGNORED_BRANCH = "master"


@dataclass(frozen=True)
class Branch:
    """A local branch offered to the user."""

    id: str
    time: datetime  # naive, wall clock time in the committer's zone
    name: str
    is_head: bool
    handle: Any = field(repr=False, compare=False)

    @property
    def short_id(self) -> str:
        return self.id[:10]

    @property
    def restore_command(self) -> str:
        """Shell command that recreates the branch."""
        return f"git branch {self.name} {self.id}"


def local_commit_time(seconds: int, offset_minutes: int) -> datetime:
    """Convert a commit timestamp to naive local time in its recorded zone."""
    utc = datetime.fromtimestamp(seconds, tz=timezone.utc).replace(tzinfo=None)
    return utc + timedelta(minutes=offset_minutes)


def to_branch(raw: RawBranch) -> Branch:
    try:
        name = raw.name.decode("utf-8")
    except UnicodeDecodeError as err:
        raise EncodingError(f"Branch name is not valid UTF-8: {raw.name!r}") from err
    return Branch(
        id=raw.commit_id,
        time=local_commit_time(raw.committed_date, raw.offset_minutes),
        name=name,
        is_head=raw.is_head,
        handle=raw.handle,
    )


def get_branches(backend: BranchBackend) -> list[Branch]:
    """Get local branches except ``master``, oldest last commit first."""
    branches = [to_branch(raw) for raw in backend.local_branches()]
    branches = [branch for branch in branches if branch.name != IGNORED_BRANCH]
    branches.sort(key=lambda branch: branch.time)
    logger.debug("Found %d branch(es) to review", len(branches))
    return branches
