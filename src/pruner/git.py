"""Git repository operations."""

import logging
import os
from pathlib import Path
from typing import Iterator, Optional

from git import Commit, GitCommandError, Head, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import BadName, BadObject

from pruner.backend import RawBranch
from pruner.errors import BackendError, EncodingError

logger = logging.getLogger(__name__)


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Optional[Path] = None) -> None:
        """Initialize repository.

        Without a path the repository is discovered from the environment:
        ``GIT_DIR`` if set, otherwise the current directory and its parents.
        """
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise BackendError(f"Failed to open repository: {err}") from err
        logger.debug("Opened repository at %s", self.repo.git_dir)

    def get_current_branch_path(self) -> str:
        """Get the full ref path of the current branch, empty on a detached HEAD."""
        try:
            if self.repo.head.is_detached:
                return ""
            return self.repo.head.reference.path
        except (GitCommandError, ValueError) as err:
            raise BackendError(f"Failed to get current branch: {err}") from err

    def local_branches(self) -> Iterator[RawBranch]:
        """Yield every local branch with its tip commit."""
        current = self.get_current_branch_path()
        try:
            heads = list(self.repo.heads)
        except UnicodeDecodeError as err:
            # packed-refs is read as UTF-8 text
            raise EncodingError(f"Branch name is not valid UTF-8: {err}") from err
        except (GitCommandError, ValueError, OSError) as err:
            raise BackendError(f"Failed to list branches: {err}") from err

        for head in heads:
            try:
                commit = head.commit
            except (GitCommandError, ValueError, BadName, BadObject) as err:
                raise BackendError(f"Failed to read tip of branch {head.path}: {err}") from err
            yield RawBranch(
                name=os.fsencode(head.name),
                is_head=head.path == current,
                commit_id=commit.hexsha,
                committed_date=commit.committed_date,
                # GitPython stores the offset in seconds west of UTC
                offset_minutes=-commit.committer_tz_offset // 60,
                handle=head,
            )

    def delete_branch(self, handle: Head) -> None:
        """Force delete a local branch."""
        try:
            self.repo.delete_head(handle, force=True)
        except GitCommandError as err:
            raise BackendError(f"Failed to delete branch {handle.name}: {err}") from err
        logger.debug("Deleted %s", handle.path)

    def find_commit(self, commit_id: str) -> Commit:
        """Look up a commit by id."""
        try:
            return self.repo.commit(commit_id)
        except (BadName, BadObject, ValueError) as err:
            raise BackendError(f"Failed to find commit {commit_id}: {err}") from err

    def create_branch(self, name: str, commit: Commit) -> None:
        """Create a branch at a commit. Fails if the name is taken."""
        try:
            self.repo.git.branch(name, commit.hexsha)
        except GitCommandError as err:
            raise BackendError(f"Failed to create branch {name}: {err}") from err
        logger.debug("Created branch %s at %s", name, commit.hexsha)
