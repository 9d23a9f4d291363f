"""Strikethrough completion for ``~~``.

Thread Safety:
Stateless handler. Safe for concurrent use across threads.
"""

from __future__ import annotations

from typing import ClassVar

from remiendo.handlers.builtins.emphasis import DelimiterPairHandler


class StrikethroughHandler(DelimiterPairHandler):
    """Close ``~~strike``, or finish a half-typed ``~~strike~``.

    Tilde runs of three or more are fences and fall inside code regions, so
    ``~~~`` never counts as a strikethrough marker.
    """

    name: ClassVar[str] = "strikethrough"
    priority: ClassVar[int] = 60
    marker: ClassVar[str] = "~~"
