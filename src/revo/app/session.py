from __future__ import annotations

import queue
import time
from dataclasses import dataclass
from typing import Optional, Union

from ..core.domain.exceptions import RunTimeoutError
from ..core.domain.messages import ErrorMessage, ResultMessage
from ..core.domain.models import AnalysisPayload, AnalysisRequest, RepositoryIdentifier
from ..core.services import ExecutionCoordinator


@dataclass(frozen=True)
class RunOutcome:
    """The single message a run produced, for the repository it was about."""
    repository: RepositoryIdentifier
    message: Union[ResultMessage, ErrorMessage]

    @property
    def ok(self) -> bool:
        return isinstance(self.message, ResultMessage)

    @property
    def payload(self) -> Optional[AnalysisPayload]:
        if isinstance(self.message, ResultMessage):
            return AnalysisPayload.from_dict(self.message.payload)
        return None

    @property
    def preview(self) -> Optional[str]:
        return self.message.preview if isinstance(self.message, ResultMessage) else None

    @property
    def error(self) -> Optional[str]:
        return self.message.message if isinstance(self.message, ErrorMessage) else None

    def to_dict(self) -> dict:
        return self.message.model_dump()


class AnalysisSession:
    """One interactive session owning one execution coordinator.

    Use as a context manager: entering starts the background worker (or
    selects inline mode), leaving tears it down.
    """

    def __init__(self, *, coordinator: ExecutionCoordinator, poll_interval: float = 0.05) -> None:
        self._coordinator = coordinator
        self._poll_interval = poll_interval
        self._started = False

    @property
    def inline(self) -> bool:
        return self._coordinator.degraded

    def __enter__(self) -> "AnalysisSession":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def open(self) -> None:
        if not self._started:
            self._coordinator.start()
            self._started = True

    def close(self) -> None:
        if self._started:
            self._coordinator.close()
            self._started = False

    def analyze(self, request: AnalysisRequest, timeout: Optional[float] = None) -> RunOutcome:
        """Submit a run and wait for its message.

        Inline runs execute on this thread while waiting. A worker thread that
        dies mid-run is reported as an error outcome.

        Raises:
            RunTimeoutError: If no message arrives within ``timeout`` seconds
        """
        self.open()
        inbox: "queue.Queue[RunOutcome]" = queue.Queue()
        self._coordinator.submit(request, lambda repo, msg: inbox.put(RunOutcome(repository=repo, message=msg)))

        deadline = time.monotonic() + timeout if timeout is not None else None
        while True:
            self._coordinator.run_pending()
            try:
                return inbox.get(timeout=self._poll_interval)
            except queue.Empty:
                pass
            if self._coordinator.worker_failed:
                return RunOutcome(
                    repository=request.repository,
                    message=ErrorMessage(message="Repository worker failed"),
                )
            if deadline is not None and time.monotonic() > deadline:
                raise RunTimeoutError(f"No result for {request.repository.slug} after {timeout}s")
