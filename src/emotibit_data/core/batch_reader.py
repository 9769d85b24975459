from __future__ import annotations

"""
Drive the packet parser over whole line sources.

File-backed sources are finite and end when the iterator is exhausted;
transport-backed sources (one line per datagram) run until the source closes
or the caller sets a stop event. A malformed line only ever produces one
failed :class:`ParseResult`; the next line is parsed as usual.
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..config.runtime import ParserConfig
from ..dataio.line_source import iter_file_lines
from ..tools.debug import time_block
from .models import BatchResult, ParseResult
from .packet_parser import parse_result

logger = logging.getLogger(__name__)

NumberedLine = Tuple[int, str]
ResultSink = Callable[[ParseResult], None]


def _numbered(
    lines: Iterable[str],
    config: ParserConfig,
    stop_event: Optional[threading.Event],
) -> Iterator[NumberedLine]:
    """Number lines from 1, dropping blank ones when configured to."""
    for line_no, raw_line in enumerate(lines, start=1):
        if stop_event is not None and stop_event.is_set():
            break
        if config.skip_blank_lines and not raw_line.strip():
            continue
        yield line_no, raw_line


def _parse_numbered(item: NumberedLine, options: dict) -> ParseResult:
    line_no, raw_line = item
    return parse_result(raw_line, line_no, **options)


def _iter_parallel(
    numbered: Iterator[NumberedLine],
    config: ParserConfig,
    workers: int,
) -> Iterator[ParseResult]:
    """
    Parse chunks of lines on a thread pool.

    Each task carries its line number and ``Executor.map`` hands results back
    in submission order, so output order matches input order. A chunk is only
    dispatched once ``chunk_size`` lines have arrived or the source ends.
    """
    options = config.parse_options()
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="EmotiBitParser") as pool:
        while True:
            chunk: List[NumberedLine] = list(islice(numbered, config.chunk_size))
            if not chunk:
                break
            yield from pool.map(lambda item: _parse_numbered(item, options), chunk)


def iter_results(
    lines: Iterable[str],
    *,
    config: Optional[ParserConfig] = None,
    workers: Optional[int] = None,
    stop_event: Optional[threading.Event] = None,
) -> Iterator[ParseResult]:
    """
    Lazily parse ``lines`` and yield one :class:`ParseResult` per line, in order.

    With one worker (the default) every line is parsed as soon as it is read,
    so this suits unbounded sources such as a live transport. With more
    workers lines are buffered ``chunk_size`` at a time before any result is
    yielded; use that mode for finite sources like recorded files. Iteration
    stops early once ``stop_event`` is set.
    """
    cfg = (config or ParserConfig()).sanitized()
    n_workers = max(1, int(workers if workers is not None else cfg.workers))
    numbered = _numbered(lines, cfg, stop_event)

    if n_workers > 1:
        yield from _iter_parallel(numbered, cfg, n_workers)
        return

    options = cfg.parse_options()
    for item in numbered:
        yield _parse_numbered(item, options)


def read_lines(
    lines: Iterable[str],
    *,
    config: Optional[ParserConfig] = None,
    workers: Optional[int] = None,
) -> BatchResult:
    """Parse every line of a finite source and partition the outcomes."""
    with time_block("read_lines"):
        batch = BatchResult(list(iter_results(lines, config=config, workers=workers)))

    for failure in batch.failures:
        logger.debug("Line %d rejected (%s): %s", failure.line_no, failure.error.kind, failure.error)
    logger.info("Parsed %d packets, %d errors", len(batch.packets), len(batch.errors))
    return batch


def read_file(
    path: str | Path,
    *,
    config: Optional[ParserConfig] = None,
    workers: Optional[int] = None,
    encoding: str = "utf-8",
) -> BatchResult:
    """Parse a raw EmotiBit CSV recording (no header row)."""
    return read_lines(iter_file_lines(path, encoding=encoding), config=config, workers=workers)


def reader_loop(
    stream: Iterable[str],
    sink: ResultSink,
    *,
    config: Optional[ParserConfig] = None,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Parse lines from ``stream`` and push each result into ``sink``.

    This is intended to run in a background thread: it stops when the
    input stream is exhausted or when an optional ``stop_event`` is set.
    """
    for result in iter_results(stream, config=config, workers=1, stop_event=stop_event):
        if not result.ok:
            logger.debug("Malformed packet line %d: %s", result.line_no, result.error)
        try:
            sink(result)
        except Exception:
            logger.exception("Result sink failed for line %d", result.line_no)


@dataclass
class ReaderHandle:
    thread: threading.Thread
    stop_event: threading.Event

    def stop(self, *, join: bool = False, timeout: Optional[float] = None) -> None:
        self.stop_event.set()
        if join:
            self.thread.join(timeout)

    def is_alive(self) -> bool:
        return self.thread.is_alive()


def start_reader(
    stream: Iterable[str],
    sink: ResultSink,
    *,
    config: Optional[ParserConfig] = None,
    thread_name: Optional[str] = None,
) -> ReaderHandle:
    """
    Start a background thread that parses packet lines from *stream*.
    """
    stop_event = threading.Event()

    def _target() -> None:
        reader_loop(stream, sink, config=config, stop_event=stop_event)

    thread = threading.Thread(
        target=_target,
        name=thread_name or "EmotiBitPacketReader",
        daemon=True,
    )
    thread.start()
    return ReaderHandle(thread=thread, stop_event=stop_event)


__all__ = [
    "ReaderHandle",
    "iter_results",
    "read_file",
    "read_lines",
    "reader_loop",
    "start_reader",
]
