"""Upload hook registry.

Success hooks receive ``(context, result)`` after a completion produced a
result; error hooks receive ``(context, session, error)`` when completion
failed. Hooks run in registration order, each under a timeout. A hook that
fails or times out is logged and the remaining hooks still run.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ....core.context import OperationContext
from ...core.entities import UploadResult, UploadSession

SuccessHook = Callable[[OperationContext, UploadResult], Awaitable[Any]]
ErrorHook = Callable[[OperationContext, Optional[UploadSession], Exception], Awaitable[Any]]


@dataclass
class RegisteredHook:
    """A registered hook with its execution statistics."""
    name: str
    function: Callable[..., Awaitable[Any]]
    stats: Dict[str, int] = field(default_factory=lambda: {"executions": 0, "successes": 0, "failures": 0})


class HookRegistry:
    """Registry for success and error hooks of resumable uploads."""

    def __init__(self, timeout_seconds: float = 30.0):
        self.timeout_seconds = timeout_seconds
        self._success_hooks: List[RegisteredHook] = []
        self._error_hooks: List[RegisteredHook] = []
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def _hook_name(function: Callable, name: Optional[str]) -> str:
        return name or getattr(function, "__qualname__", None) or repr(function)

    def register_success_hook(self, hook: SuccessHook, name: Optional[str] = None) -> None:
        """Register an async callback run after every successful completion."""
        registered = RegisteredHook(self._hook_name(hook, name), hook)
        self._success_hooks.append(registered)
        self._logger.info(f"Registered success hook '{registered.name}'")

    def register_error_hook(self, hook: ErrorHook, name: Optional[str] = None) -> None:
        """Register an async callback run after every failed completion."""
        registered = RegisteredHook(self._hook_name(hook, name), hook)
        self._error_hooks.append(registered)
        self._logger.info(f"Registered error hook '{registered.name}'")

    @property
    def success_hooks(self) -> List[str]:
        return [hook.name for hook in self._success_hooks]

    @property
    def error_hooks(self) -> List[str]:
        return [hook.name for hook in self._error_hooks]

    async def run_success_hooks(self, ctx: OperationContext, result: UploadResult) -> int:
        """Run success hooks. Returns the number of hooks that failed."""
        return await self._run(self._success_hooks, ctx, result)

    async def run_error_hooks(
        self,
        ctx: OperationContext,
        session: Optional[UploadSession],
        error: Exception
    ) -> int:
        """Run error hooks. Returns the number of hooks that failed."""
        return await self._run(self._error_hooks, ctx, session, error)

    async def _run(self, hooks: List[RegisteredHook], *args) -> int:
        failures = 0
        for hook in list(hooks):
            hook.stats["executions"] += 1
            try:
                await asyncio.wait_for(hook.function(*args), timeout=self.timeout_seconds)
                hook.stats["successes"] += 1
            except asyncio.TimeoutError:
                failures += 1
                hook.stats["failures"] += 1
                self._logger.error(f"Hook '{hook.name}' timed out after {self.timeout_seconds}s")
            except Exception as e:
                failures += 1
                hook.stats["failures"] += 1
                self._logger.error(f"Hook '{hook.name}' failed: {str(e)}", exc_info=True)
        return failures

    def get_hook_stats(self) -> Dict[str, Dict[str, int]]:
        """Execution statistics keyed by hook name."""
        return {hook.name: dict(hook.stats) for hook in self._success_hooks + self._error_hooks}

    def clear(self) -> None:
        self._success_hooks.clear()
        self._error_hooks.clear()
