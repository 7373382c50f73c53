"""Per-file fan-out shared by the analysis phases."""

import contextvars
from concurrent.futures import Executor
from typing import Callable, Iterable, Iterator, Optional, TypeVar

S = TypeVar("S")
T = TypeVar("T")


def map_files(
    func: Callable[[S], T],
    files: Iterable[S],
    executor: Optional[Executor] = None,
) -> Iterator[T]:
    """
    Apply ``func`` to every file, on the executor when one is given.

    Results come back in input order, so merging them is deterministic
    regardless of which worker finished first. Each task runs in a copy of
    the caller's context.
    """
    if executor is None:
        return map(func, files)

    snapshot = contextvars.copy_context()
    return executor.map(lambda item: snapshot.copy().run(func, item), files)
