"""Nesting limits for the plural rule parser.

Rule expressions come from dictionary data, so a broken file could nest
parentheses deep enough to exhaust the interpreter stack. The parser enters
a DepthGuard for every nesting level and turns DepthLimitExceededError into
a RuleCompilationError that carries the offending position.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from lexiconengine.constants import MAX_DEPTH

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)

# Parser frames consumed per nesting level (conditional, logical, binary
# chain, unary, primary and the guard's own calls).
_FRAMES_PER_LEVEL = 8


class DepthLimitExceededError(RecursionError):
    """Nesting went past DepthGuard.max_depth.

    Attributes:
        max_depth: The limit that was hit
    """

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Nesting deeper than {max_depth} levels")
        self.max_depth = max_depth


@dataclass(slots=True)
class DepthGuard:
    """Reentrant nesting counter used as a context manager.

    One guard per parse; guards are not shared between threads.

    Example:
        >>> guard = DepthGuard(max_depth=2)
        >>> with guard, guard:
        ...     guard.depth
        2

    Attributes:
        max_depth: Deepest allowed level, clamped by depth_clamp()
        current_depth: Levels currently entered
        peak_depth: Deepest level entered so far
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)
    peak_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Check before incrementing: __exit__ does not run when __enter__ raises.
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(self.max_depth)
        self.current_depth += 1
        self.peak_depth = max(self.peak_depth, self.current_depth)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Levels currently entered."""
        return self.current_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 100) -> int:
    """Lower a requested nesting limit to what the interpreter stack allows.

    Returns:
        requested_depth, or the largest safe depth (logged at WARNING)
    """
    recursion_limit = sys.getrecursionlimit()
    safe_depth = (recursion_limit - reserve_frames) // _FRAMES_PER_LEVEL
    if requested_depth <= safe_depth:
        return requested_depth
    logger.warning(
        "Rule nesting limit %d exceeds what recursion limit %d allows; clamping to %d",
        requested_depth,
        recursion_limit,
        safe_depth,
    )
    return safe_depth
