# docmirror/core/concurrency.py
"""
Bounded fan-out helper.

Network fetches and file writes run on a thread pool capped at the
configured worker count so the GitHub API rate limit is respected.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Tuple, TypeVar

from docmirror.exceptions import BatchError

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MAX_WORKERS = 8


def map_all(
    fn: Callable[[T], R],
    items: Iterable[T],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    label: str = "batch",
) -> List[R]:
    """
    Run fn over every item concurrently and join on all of them.

    Every task runs to completion. Failures are collected and raised
    together as one BatchError once the whole batch has finished; no
    partial result is returned.

    Args:
        fn: Function applied to each item
        items: Inputs
        max_workers: Upper bound on concurrently running calls
        label: Batch description used in the error message

    Returns:
        Results in input order

    Raises:
        BatchError: If at least one call raised
    """
    items = list(items)
    if not items:
        return []

    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    results: List[R] = [None] * len(items)  # type: ignore[list-item]
    failures: List[Tuple[int, BaseException]] = []

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        future_to_index = {executor.submit(fn, item): i for i, item in enumerate(items)}

        for future in as_completed(future_to_index):
            index = future_to_index[future]
            exc = future.exception()
            if exc is not None:
                failures.append((index, exc))
            else:
                results[index] = future.result()

    if failures:
        failures.sort(key=lambda pair: pair[0])
        raise BatchError(label, [(items[i], exc) for i, exc in failures])

    return results


__all__ = ["DEFAULT_MAX_WORKERS", "map_all"]
