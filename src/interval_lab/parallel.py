"""Complexity-gated fork-join execution for bulk element-wise work.

A bulk operation reports a complexity score (element count, or element count
times inner dimension for products). When parallel execution is enabled and
the score reaches the threshold, the index range is split into contiguous
chunks and run on a thread pool; the caller blocks until every chunk has
finished. Otherwise the body runs as a plain loop.

Configuration is resolved once per call, on the calling thread:
explicit ``config`` argument > ``use_parallel_config`` context > process
default.
"""

from __future__ import annotations

import contextvars
import logging
import os
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, replace

from interval_lab.errors import ParallelExecutionError

logger = logging.getLogger(__name__)


DEFAULT_PARALLEL_THRESHOLD: int = 10_000
"""Complexity at which bulk operations switch to parallel execution."""


@dataclass(frozen=True, slots=True)
class ParallelConfig:
    """Settings for the parallel dispatcher."""

    threshold: int = DEFAULT_PARALLEL_THRESHOLD
    """Minimum complexity for parallel execution."""

    enabled: bool = True
    """Master switch; False forces sequential execution everywhere."""

    max_workers: int | None = None
    """Thread pool size (None: number of CPUs)."""

    def __post_init__(self) -> None:
        if self.threshold < 0:
            msg = f"threshold must be >= 0, got {self.threshold}"
            raise ValueError(msg)
        if self.max_workers is not None and self.max_workers < 1:
            msg = f"max_workers must be >= 1, got {self.max_workers}"
            raise ValueError(msg)

    @property
    def workers(self) -> int:
        """Effective number of workers."""
        return self.max_workers or os.cpu_count() or 1


_default_config = ParallelConfig()
_context_config: contextvars.ContextVar[ParallelConfig | None] = contextvars.ContextVar(
    "interval_lab_parallel_config", default=None
)


# =============================================================================
# CONFIGURATION
# =============================================================================


def get_parallel_config() -> ParallelConfig:
    """Return the process-wide default configuration."""
    return _default_config


def set_parallel_config(config: ParallelConfig) -> None:
    """Replace the process-wide default configuration."""
    global _default_config
    _default_config = config


def configure_parallel(
    *,
    threshold: int | None = None,
    enabled: bool | None = None,
    max_workers: int | None = None,
) -> ParallelConfig:
    """
    Update selected fields of the process-wide default.

    Args:
        threshold: New complexity threshold.
        enabled: New master switch value.
        max_workers: New thread pool size.

    Returns:
        The new default configuration.

    Example:
        >>> configure_parallel(enabled=False).enabled
        False
    """
    changes: dict[str, int | bool] = {}
    if threshold is not None:
        changes["threshold"] = threshold
    if enabled is not None:
        changes["enabled"] = enabled
    if max_workers is not None:
        changes["max_workers"] = max_workers
    config = replace(_default_config, **changes)
    set_parallel_config(config)
    return config


@contextmanager
def use_parallel_config(config: ParallelConfig) -> Iterator[ParallelConfig]:
    """Override the configuration for calls made in this context."""
    token = _context_config.set(config)
    try:
        yield config
    finally:
        _context_config.reset(token)


def resolve_config(config: ParallelConfig | None = None) -> ParallelConfig:
    """Pick the explicit config, else the context override, else the default."""
    if config is not None:
        return config
    return _context_config.get() or _default_config


# =============================================================================
# DISPATCH
# =============================================================================


def should_parallelize(complexity: int, config: ParallelConfig | None = None) -> bool:
    """True if an operation of this complexity runs in parallel."""
    config = resolve_config(config)
    return config.enabled and complexity >= config.threshold


def parallel_for(
    start: int,
    stop: int,
    body: Callable[[int], None],
    complexity: int,
    *,
    config: ParallelConfig | None = None,
) -> None:
    """
    Run ``body(i)`` for every i in [start, stop).

    Runs in parallel when ``should_parallelize(complexity)``; returns only
    after all indices are done. Bodies must write disjoint state or guard
    shared state themselves.

    Args:
        start: First index (inclusive).
        stop: Last index (exclusive).
        body: Work for one index.
        complexity: Cost estimate compared against the threshold.
        config: Explicit configuration (see ``resolve_config``).

    Raises:
        ParallelExecutionError: If any body raised during parallel execution.
    """
    config = resolve_config(config)
    count = stop - start
    if count <= 0:
        return

    workers = min(config.workers, count)
    if not should_parallelize(complexity, config) or workers < 2:
        logger.debug("sequential loop: %d indices, complexity %d", count, complexity)
        for i in range(start, stop):
            body(i)
        return

    logger.debug(
        "parallel loop: %d indices on %d workers, complexity %d",
        count,
        workers,
        complexity,
    )
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_run_chunk, body, lo, hi)
            for lo, hi in _chunks(start, stop, workers)
        ]
    errors = [exc for exc in (f.exception() for f in futures) if exc is not None]
    if errors:
        logger.debug("parallel loop failed in %d of %d chunks", len(errors), len(futures))
        raise ParallelExecutionError(
            f"{len(errors)} parallel worker(s) failed", [_as_exception(e) for e in errors]
        )


def _run_chunk(body: Callable[[int], None], lo: int, hi: int) -> None:
    for i in range(lo, hi):
        body(i)


def _chunks(start: int, stop: int, parts: int) -> Iterator[tuple[int, int]]:
    """Split [start, stop) into ``parts`` contiguous, nearly equal ranges."""
    size, extra = divmod(stop - start, parts)
    lo = start
    for k in range(parts):
        hi = lo + size + (1 if k < extra else 0)
        if hi > lo:
            yield lo, hi
        lo = hi


def _as_exception(error: BaseException) -> Exception:
    if isinstance(error, Exception):
        return error
    # ExceptionGroup only holds Exception instances
    wrapped = RuntimeError(f"worker aborted: {error!r}")
    wrapped.__cause__ = error
    return wrapped


__all__ = [
    "DEFAULT_PARALLEL_THRESHOLD",
    "ParallelConfig",
    "configure_parallel",
    "get_parallel_config",
    "parallel_for",
    "resolve_config",
    "set_parallel_config",
    "should_parallelize",
    "use_parallel_config",
]
