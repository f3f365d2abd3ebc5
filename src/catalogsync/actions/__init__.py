"""State-changing marketplace actions."""

from catalogsync.actions.dispatcher import ActionDispatcher, ActionRecord

__all__ = [
    "ActionDispatcher",
    "ActionRecord",
]
