"""Run-scoped helpers.

``walkforward.runtime.context`` depends on the config loader and is imported
directly by callers.
"""

from walkforward.runtime.ids import IdAllocator
from walkforward.runtime.post_run import PostRunResult, run_post_command

__all__ = [
    "IdAllocator",
    "PostRunResult",
    "run_post_command",
]
