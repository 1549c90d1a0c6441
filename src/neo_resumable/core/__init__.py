"""Core module for neo-resumable: base exceptions and operation context."""

from .context import OperationContext, bind_context, current_context, deadline_scope

__all__ = [
    "OperationContext",
    "bind_context",
    "current_context",
    "deadline_scope",
]
