"""Repository capabilities the pruning loop depends on."""

from dataclasses import dataclass
from typing import Any, Iterable, Protocol, runtime_checkable


@dataclass(frozen=True)
class RawBranch:
    """A local branch as reported by a backend, before decoding."""

    name: bytes
    is_head: bool
    commit_id: str
    committed_date: int  # seconds since epoch
    offset_minutes: int  # committer UTC offset, east of UTC is positive
    handle: Any


@runtime_checkable
class BranchBackend(Protocol):
    """Protocol for a repository holding local branches."""

    def local_branches(self) -> Iterable[RawBranch]:
        """Yield every local branch."""
        ...

    def delete_branch(self, handle: Any) -> None:
        """Delete the branch behind a handle from ``local_branches``."""
        ...

    def create_branch(self, name: str, commit: Any) -> None:
        """Create branch ``name`` pointing at ``commit``."""
        ...

    def find_commit(self, commit_id: str) -> Any:
        """Look up a commit by its id."""
        ...
