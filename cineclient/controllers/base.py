"""
Controller plumbing.

Controllers own the asyncio tasks a screen launches. Each logical action is
tracked by a generation counter: when an action is re-issued, results from
older calls of that action are discarded.
"""

import asyncio
from typing import Awaitable, Callable, Dict, List, Optional, Set, TypeVar

from cineclient.api.errors import ClientError
from cineclient.state.observable import MutableStateFlow, StateFlow
from cineclient.state.results import LOADING, Error, RequestState
from cineclient.utils.logger import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = "An unexpected error occurred"

F = TypeVar("F", bound=StateFlow)

Operation = Callable[[], Awaitable[RequestState]]


class Controller:
    """
    Base class for view-state controllers.

    Must be constructed while an event loop is running; controllers that
    fetch on construction launch their first task right away.
    """

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()
        self._generations: Dict[str, int] = {}
        self._derived: List[StateFlow] = []

    # --------------------
    # Task management
    # --------------------

    def _launch(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def idle(self) -> None:
        """Wait until every launched task, including follow-ups, is done."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """Cancel pending work and detach derived flows from their sources."""
        for task in list(self._tasks):
            task.cancel()
        while self._derived:
            self._derived.pop().release()

    def _derive(self, flow: F) -> F:
        """Tie a derived flow to this controller's lifetime."""
        self._derived.append(flow)
        return flow

    # --------------------
    # Request state machine
    # --------------------

    def _run(
        self,
        action: str,
        target: MutableStateFlow,
        operation: Operation,
        fallback: str = GENERIC_ERROR,
        on_result: Optional[Callable[[RequestState], None]] = None,
    ) -> asyncio.Task:
        """
        Move ``target`` to Loading and run ``operation`` in a task.

        The operation's result (or its failure mapped to Error) is written
        to ``target`` only if no newer call of ``action`` was issued since.
        """
        generation = self._generations.get(action, 0) + 1
        self._generations[action] = generation
        target.value = LOADING

        return self._launch(
            self._execute(action, generation, target, operation, fallback, on_result)
        )

    async def _execute(
        self,
        action: str,
        generation: int,
        target: MutableStateFlow,
        operation: Operation,
        fallback: str,
        on_result: Optional[Callable[[RequestState], None]],
    ) -> None:
        try:
            result = await operation()

        except ClientError as exc:
            logger.warning(
                "Action failed",
                extra={"action": action, "error": type(exc).__name__},
            )
            result = Error(str(exc) or fallback)

        except Exception:
            logger.exception("Unexpected error in action", extra={"action": action})
            result = Error(fallback)

        if self._generations.get(action) != generation:
            logger.debug("Discarding superseded result", extra={"action": action})
            return

        target.value = result
        if on_result is not None:
            on_result(result)
