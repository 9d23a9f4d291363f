"""Exception classes for remiendo.

Healing and segmentation never raise on malformed Markdown. These exceptions
cover misuse of the extension surface: registering bad handlers, or a user
handler failing while ``strict_handlers`` is enabled.
"""

from __future__ import annotations


class RemiendoError(Exception):
    """Base exception for all remiendo errors."""

    pass


class HandlerError(RemiendoError):
    """A user-supplied handler failed while healing a block.

    Only raised when the active HealConfig has ``strict_handlers=True``;
    otherwise the failure is logged and the handler's input is kept.
    """

    def __init__(self, handler_name: str, message: str) -> None:
        """Initialize handler error.

        Args:
            handler_name: Name of the failing handler
            message: Description of the failure
        """
        self.handler_name = handler_name
        super().__init__(f"Handler '{handler_name}': {message}")


class RegistrationError(RemiendoError, ValueError):
    """Handler registration conflict (e.g. duplicate handler name)."""

    pass
