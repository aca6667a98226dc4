"""Interactive keep/delete/undo loop over local branches."""

import logging
from enum import Enum
from typing import Optional

from pruner.backend import BranchBackend
from pruner.branches import Branch, get_branches
from pruner.errors import InvalidInputError
from pruner.terminal import Terminal

logger = logging.getLogger(__name__)

HELP_KEY = "?"
HELP_TEXT = (
    "Here are what the commands mean",
    "k - Keep the branch",
    "d - Delete the branch",
    "u - Undo last deleted branch",
    "q - Quit",
    "? - Show this help text",
)


class Action(Enum):
    """What to do with a branch."""

    KEEP = "k"
    DELETE = "d"
    QUIT = "q"
    UNDO = "u"

    @classmethod
    def from_key(cls, key: str) -> "Action":
        """Parse a keystroke. Raises InvalidInputError for unknown keys."""
        try:
            return cls(key)
        except ValueError as err:
            raise InvalidInputError(key) from err


class UndoBuffer:
    """Remembers the most recently deleted branch, and only that one."""

    def __init__(self) -> None:
        self._branch: Optional[Branch] = None

    def __len__(self) -> int:
        return 0 if self._branch is None else 1

    def push(self, branch: Branch) -> None:
        """Store a deleted branch, dropping whatever was held before."""
        self._branch = branch

    def pop(self) -> Optional[Branch]:
        """Take the held branch out, leaving the buffer empty."""
        branch, self._branch = self._branch, None
        return branch


class Pruner:
    """Walks local branches and applies the user's choice to each.

    Args:
        backend: Repository the branches live in
        terminal: Where prompts go and keystrokes come from
    """

    def __init__(self, backend: BranchBackend, terminal: Terminal) -> None:
        self.backend = backend
        self.terminal = terminal
        self.undo_buffer = UndoBuffer()
        self.deleted: list[Branch] = []

    def run(self) -> None:
        """Prompt for every branch until the list runs out or the user quits."""
        branches = get_branches(self.backend)
        if not branches:
            self.terminal.writeline("Found no branches (we ignore 'master')")
            return

        for branch in branches:
            if not self.act_on_branch(branch):
                logger.debug("Quit at %s", branch.name)
                return

    def act_on_branch(self, branch: Branch) -> bool:
        """Handle one branch. Returns False when the user asked to quit."""
        if branch.is_head:
            self.terminal.writeline(f"Ignoring '{branch.name}' because it is the current branch")
            return True

        # Undo does not use up the branch's turn
        action = self.ask(branch)
        while action is Action.UNDO:
            self.undo()
            action = self.ask(branch)

        if action is Action.QUIT:
            return False
        if action is Action.DELETE:
            self.delete(branch)
        return True

    def ask(self, branch: Branch) -> Action:
        """Prompt until a key maps to an action. Closed input counts as quit."""
        while True:
            self.terminal.write(
                f"'{branch.name}' ({branch.short_id}) last commit at {branch.time} (k/d/q/u/?) > "
            )
            self.terminal.flush()

            key = self.terminal.read_key()
            if key is None:
                self.terminal.writeline()
                return Action.QUIT
            self.terminal.writeline(key)

            if key != HELP_KEY:
                return Action.from_key(key)
            for line in HELP_TEXT:
                self.terminal.writeline(line)

    def delete(self, branch: Branch) -> None:
        self.backend.delete_branch(branch.handle)
        self.terminal.writeline(
            f"Deleted branch '{branch.name}', to undo run `{branch.restore_command}`"
        )
        self.undo_buffer.push(branch)
        self.deleted.append(branch)

    def undo(self) -> None:
        """Recreate the last deleted branch at its old commit."""
        branch = self.undo_buffer.pop()
        if branch is None:
            self.terminal.writeline("Didn't find anything to undo")
            return

        commit = self.backend.find_commit(branch.id)
        self.backend.create_branch(branch.name, commit)
        self.deleted.remove(branch)
        logger.info("Restored %s at %s", branch.name, branch.id)
