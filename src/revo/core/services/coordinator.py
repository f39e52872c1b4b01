from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from ..domain.exceptions import RevoError, WorkerStartError
from ..domain.messages import ErrorMessage, ResultMessage, parse_message
from ..domain.models import AnalysisRequest, RepositoryIdentifier
from ..ports import LoggerPort
from .content_fetcher import FetchSchedule
from .sampling_pipeline import SamplingPipeline


MessageCallback = Callable[[RepositoryIdentifier, Union[ResultMessage, ErrorMessage]], None]


@dataclass(frozen=True)
class RunTicket:
    run_id: int
    request: AnalysisRequest
    on_message: MessageCallback
    cancel: threading.Event = field(default_factory=threading.Event)


class BackgroundWorker:
    """Handle on one background thread that executes runs from an inbox.

    Owned by a coordinator; ``close()`` stops the thread deterministically.
    """

    def __init__(self, *, handler: Callable[[RunTicket], None], name: str = "revo-worker") -> None:
        self._handler = handler
        self._name = name
        self._inbox: "queue.Queue[RunTicket | None]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        thread = threading.Thread(target=self._loop, name=self._name, daemon=True)
        try:
            thread.start()
        except RuntimeError as e:
            raise WorkerStartError(f"Could not start background worker: {e}") from e
        self._thread = thread

    def submit(self, ticket: RunTicket) -> None:
        if not self.is_alive:
            raise WorkerStartError("Background worker is not running")
        self._inbox.put(ticket)

    def close(self, timeout: Optional[float] = 5.0) -> None:
        if self._thread is None:
            return
        self._inbox.put(None)
        self._thread.join(timeout)
        self._thread = None

    def _loop(self) -> None:
        while True:
            ticket = self._inbox.get()
            if ticket is None:
                return
            self._handler(ticket)


WorkerFactory = Callable[..., BackgroundWorker]


class ExecutionCoordinator:
    """Runs sampling pipelines without blocking the caller.

    Runs go to a background worker when one could be started. Otherwise they
    are queued and executed inline from ``run_pending()``, fetching in
    batches of ``concurrency`` paths with a short pause between batches.

    Each submit supersedes the previous run: its cancel event is set and any
    message it still produces is discarded.
    """

    def __init__(
        self,
        *,
        pipeline: SamplingPipeline,
        logger: LoggerPort,
        worker_factory: WorkerFactory = BackgroundWorker,
        inline_pause: float = 0.02,
        idle_delay: float = 0.05,
    ) -> None:
        self._pipeline = pipeline
        self._logger = logger
        self._worker_factory = worker_factory
        self._inline_pause = inline_pause
        self._idle_delay = idle_delay

        self._lock = threading.Lock()
        self._worker: Optional[BackgroundWorker] = None
        self._run_id = 0
        self._current: Optional[RunTicket] = None
        self._pending: Optional[RunTicket] = None
        self._pending_since = 0.0

    @property
    def degraded(self) -> bool:
        return self._worker is None

    @property
    def worker_failed(self) -> bool:
        """True when a started worker thread is no longer running."""
        return self._worker is not None and not self._worker.is_alive

    def start(self) -> None:
        """Start the background worker, or fall back to inline execution."""
        try:
            worker = self._worker_factory(handler=self._run_in_worker)
            worker.start()
        except Exception as e:
            self._logger.warning("worker_unavailable", type="worker_unavailable", error=str(e))
            self._worker = None
            return
        self._worker = worker
        self._logger.debug("worker_started", type="worker_started")

    def submit(self, request: AnalysisRequest, on_message: MessageCallback) -> int:
        """Start one run for ``request``; returns its run id."""
        with self._lock:
            self._run_id += 1
            ticket = RunTicket(run_id=self._run_id, request=request, on_message=on_message)
            if self._current is not None:
                self._current.cancel.set()
            self._current = ticket

        self._logger.info(
            "run_submitted",
            type="run_submitted",
            run_id=ticket.run_id,
            repo=request.repository.slug,
            inline=self._worker is None,
        )

        if self._worker is not None:
            try:
                self._worker.submit(ticket)
                return ticket.run_id
            except WorkerStartError as e:
                self._logger.warning("worker_submit_failed", type="worker_submit_failed", error=str(e))
                self._worker = None

        with self._lock:
            self._pending = ticket
            self._pending_since = time.monotonic()
        return ticket.run_id

    def run_pending(self) -> bool:
        """Execute the queued inline run, if any. Returns True when one ran."""
        with self._lock:
            ticket = self._pending
            self._pending = None
            since = self._pending_since
        if ticket is None:
            return False

        remaining = self._idle_delay - (time.monotonic() - since)
        if remaining > 0:
            time.sleep(remaining)

        schedule = FetchSchedule(batch_size=ticket.request.concurrency, pause=self._inline_pause)
        self._execute(ticket, schedule, failure_prefix="Repository analysis failed")
        return True

    def close(self) -> None:
        with self._lock:
            if self._current is not None:
                self._current.cancel.set()
            self._pending = None
            worker, self._worker = self._worker, None
        if worker is not None:
            worker.close()

    def _run_in_worker(self, ticket: RunTicket) -> None:
        self._execute(ticket, FetchSchedule(), failure_prefix="Repository worker failed")

    def _execute(self, ticket: RunTicket, schedule: FetchSchedule, *, failure_prefix: str) -> None:
        if ticket.cancel.is_set():
            self._logger.info("run_discarded", type="run_discarded", run_id=ticket.run_id, stage="queued")
            return

        raw: dict[str, Any]
        try:
            assembled = self._pipeline.run(ticket.request, schedule=schedule, cancel=ticket.cancel)
            raw = {"type": "result", "payload": assembled.payload.to_dict(), "preview": assembled.preview}
        except RevoError as e:
            self._logger.warning("run_failed", type="run_failed", run_id=ticket.run_id, error=str(e))
            raw = {"type": "error", "message": str(e)}
        except Exception as e:
            self._logger.exception("run_crashed", type="run_crashed", run_id=ticket.run_id)
            raw = {"type": "error", "message": f"{failure_prefix}: {e}"}

        self._deliver(ticket, raw)

    def _deliver(self, ticket: RunTicket, raw: dict[str, Any]) -> None:
        with self._lock:
            current = self._current
        if (
            current is None
            or current.run_id != ticket.run_id
            or current.request.repository != ticket.request.repository
        ):
            self._logger.info("run_discarded", type="run_discarded", run_id=ticket.run_id, stage="completed")
            return

        try:
            message = parse_message(raw)
        except ValidationError as e:
            self._logger.error("invalid_message", type="invalid_message", run_id=ticket.run_id, error=str(e))
            message = ErrorMessage(message=f"Invalid run message: {e.error_count()} validation error(s)")
        ticket.on_message(ticket.request.repository, message)
