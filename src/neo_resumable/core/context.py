"""Operation context propagation.

An ``OperationContext`` travels with every top-level upload operation. It is
bound into a context variable so the blob store wrapper, hooks and the
observer can read it without threading an extra parameter through every call.
"""

import asyncio
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional


@dataclass(frozen=True)
class OperationContext:
    """Request-scoped handle carrying identity, deadline and metadata.

    ``deadline`` is expressed on the running event loop's clock
    (``loop.time()``), matching what ``asyncio.timeout_at`` expects.
    """

    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    deadline: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def with_timeout(cls, seconds: float, **kwargs: Any) -> "OperationContext":
        """Create a context whose deadline is ``seconds`` from now."""
        loop = asyncio.get_running_loop()
        return cls(deadline=loop.time() + seconds, **kwargs)

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, ``None`` when unbounded."""
        if self.deadline is None:
            return None
        return self.deadline - asyncio.get_running_loop().time()

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0


_current_context: ContextVar[Optional[OperationContext]] = ContextVar(
    "neo_resumable_operation_context", default=None
)


def current_context() -> OperationContext:
    """Return the bound context, or a fresh unbounded one outside any operation."""
    ctx = _current_context.get()
    if ctx is None:
        return OperationContext()
    return ctx


@contextmanager
def bind_context(ctx: Optional[OperationContext]) -> Iterator[OperationContext]:
    """Bind ``ctx`` (or a fresh context) for the duration of the block."""
    ctx = ctx or OperationContext()
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def deadline_scope(ctx: OperationContext) -> asyncio.Timeout:
    """Timeout scope enforcing the context deadline.

    Raises ``TimeoutError`` on exit when the deadline passed inside the block.
    """
    return asyncio.timeout_at(ctx.deadline)
