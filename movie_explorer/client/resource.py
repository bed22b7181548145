"""Lifecycle wrapper around a single asynchronous data producer.

An :class:`AsyncResource` owns the ``{data, loading, error}`` state of one
producer (usually an HTTP call) and lets a view re-run it on demand with
:meth:`AsyncResource.refetch`.

Every invocation is tagged with a generation number taken when it starts.
Only the invocation holding the newest generation may write its outcome, so
a slow, superseded call can never overwrite the result of a later one.
Superseded calls are not cancelled; their results are dropped when they
arrive.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from movie_explorer.client.errors import ErrorInfo
from movie_explorer.logging import logger

T = TypeVar("T")
Producer = Callable[[], Union[Awaitable[T], T]]


@dataclass(frozen=True, slots=True)
class ResourceState(Generic[T]):
    data: T | None = None
    loading: bool = False
    error: ErrorInfo | None = None


Listener = Callable[[ResourceState[T]], None]


class AsyncResource(Generic[T]):
    """Track the latest outcome of ``producer`` for a view layer.

    With ``auto_start`` (the default) one invocation begins during
    construction, which therefore has to happen inside a running event loop.
    With ``auto_start=False`` the producer is not called until the first
    :meth:`refetch`.
    """

    def __init__(
        self,
        producer: Producer[T],
        *,
        auto_start: bool = True,
        name: str | None = None,
    ) -> None:
        self._producer = producer
        self._name = name or getattr(producer, "__name__", "resource")
        self._state: ResourceState[T] = ResourceState()
        self._generation = 0
        self._disposed = False
        self._listeners: list[Listener[T]] = []
        self._pending: set[asyncio.Task[None]] = set()
        if auto_start:
            self.refetch()

    @property
    def state(self) -> ResourceState[T]:
        return self._state

    @property
    def data(self) -> T | None:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> ErrorInfo | None:
        return self._state.error

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def disposed(self) -> bool:
        return self._disposed

    def refetch(self) -> asyncio.Task[None] | None:
        """Start a new invocation; returns its task, or ``None`` once disposed.

        Without a running event loop nothing can be scheduled; the failure is
        recorded as the resource error and ``None`` is returned.
        """

        if self._disposed:
            return None
        self._generation += 1
        generation = self._generation
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            logger.warning("resource_not_scheduled", resource=self._name, generation=generation)
            self._set_state(
                replace(self._state, loading=False, error=ErrorInfo.from_exception(exc))
            )
            return None
        task = loop.create_task(self._invoke(generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self._set_state(replace(self._state, loading=True, error=None))
        return task

    async def wait(self) -> ResourceState[T]:
        """Wait until every in-flight invocation has finished."""

        while self._pending:
            await asyncio.gather(*list(self._pending))
        return self._state

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispose(self) -> None:
        """Stop publishing state; in-flight invocations finish unobserved."""

        self._disposed = True
        self._listeners.clear()

    async def _invoke(self, generation: int) -> None:
        try:
            result: Any = self._producer()
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            if not self._accepts(generation, outcome="error"):
                return
            logger.warning(
                "resource_invocation_failed",
                resource=self._name,
                generation=generation,
                error=str(exc),
            )
            self._set_state(
                replace(self._state, loading=False, error=ErrorInfo.from_exception(exc))
            )
            return

        if not self._accepts(generation, outcome="data"):
            return
        self._set_state(ResourceState(data=result, loading=False, error=None))

    def _accepts(self, generation: int, *, outcome: str) -> bool:
        if self._disposed:
            logger.debug(
                "resource_result_discarded",
                resource=self._name,
                generation=generation,
                outcome=outcome,
                reason="disposed",
            )
            return False
        if generation != self._generation:
            logger.debug(
                "resource_result_discarded",
                resource=self._name,
                generation=generation,
                current_generation=self._generation,
                outcome=outcome,
                reason="superseded",
            )
            return False
        return True

    def _set_state(self, state: ResourceState[T]) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("resource_listener_failed", resource=self._name)


__all__ = ["AsyncResource", "ResourceState"]
