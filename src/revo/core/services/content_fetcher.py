from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from ..domain.models import FileSample, SampleBatch
from ..domain.redaction import SENSITIVE_PLACEHOLDER, is_sensitive_path, make_snippet
from ..ports import ContentSourcePort, LoggerPort


@dataclass(frozen=True)
class FetchSchedule:
    """How the fetch work is scheduled.

    batch_size=None runs every path through one worker pool. An integer
    splits the paths into groups of that size and sleeps ``pause`` seconds
    between groups so an inline caller gets control back regularly.
    """
    batch_size: Optional[int] = None
    pause: float = 0.0


class ContentFetcher:
    """Retrieves, redacts and truncates file contents under a fixed worker pool.

    Exactly ``min(concurrency, len(batch))`` workers pull paths from a shared
    cursor, each with at most one request in flight. A path that fails is
    dropped from the result; it never aborts the batch.
    """

    def __init__(
        self,
        *,
        source: ContentSourcePort,
        concurrency: int,
        max_snippet_length: int,
        logger: LoggerPort,
    ) -> None:
        if concurrency <= 0:
            raise ValueError("concurrency must be positive")
        if max_snippet_length <= 0:
            raise ValueError("max_snippet_length must be positive")
        self._source = source
        self._concurrency = concurrency
        self._max_len = max_snippet_length
        self._logger = logger

    def fetch(
        self,
        paths: Sequence[str],
        *,
        schedule: FetchSchedule = FetchSchedule(),
        cancel: Optional[threading.Event] = None,
    ) -> SampleBatch:
        samples: list[FileSample] = []
        to_fetch: list[str] = []
        for path in paths:
            if is_sensitive_path(path):
                samples.append(FileSample(path=path, snippet=SENSITIVE_PLACEHOLDER[: self._max_len]))
            else:
                to_fetch.append(path)

        size = schedule.batch_size or len(to_fetch) or 1
        batches = [to_fetch[i : i + size] for i in range(0, len(to_fetch), size)]

        for index, batch in enumerate(batches):
            if cancel is not None and cancel.is_set():
                break
            if index > 0 and schedule.pause > 0:
                time.sleep(schedule.pause)
            samples.extend(self._run_pool(batch, cancel))

        fetched = len(samples) - (len(paths) - len(to_fetch))
        dropped = len(to_fetch) - fetched
        self._logger.info(
            "samples_fetched",
            type="samples_fetched",
            requested=len(paths),
            sensitive=len(paths) - len(to_fetch),
            fetched=fetched,
            dropped=dropped,
        )
        return SampleBatch(samples=tuple(samples), requested=len(paths), dropped=dropped)

    def _run_pool(self, paths: list[str], cancel: Optional[threading.Event]) -> list[FileSample]:
        results: list[FileSample] = []
        lock = threading.Lock()
        cursor = 0

        def worker() -> None:
            nonlocal cursor
            while True:
                if cancel is not None and cancel.is_set():
                    return
                with lock:
                    idx = cursor
                    cursor += 1
                if idx >= len(paths):
                    return
                sample = self._fetch_one(paths[idx])
                if sample is not None:
                    with lock:
                        results.append(sample)

        threads = [
            threading.Thread(target=worker, name=f"revo-fetch-{i}", daemon=True)
            for i in range(min(self._concurrency, len(paths)))
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        return results

    def _fetch_one(self, path: str) -> Optional[FileSample]:
        try:
            text = self._source.fetch_text(path)
        except Exception as e:
            self._logger.debug("sample_failed", type="sample_failed", path=path, error=str(e))
            return None
        if text is None:
            self._logger.debug("sample_missing", type="sample_missing", path=path)
            return None
        return FileSample(path=path, snippet=make_snippet(text, self._max_len))
