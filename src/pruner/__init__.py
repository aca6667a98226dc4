"""Interactive local branch pruning.

Features:
- Walk local branches oldest first (the current branch is skipped)
- Keep, delete or quit per branch with a single keystroke
- Undo the last deletion
"""

__version__ = "0.1.0"
