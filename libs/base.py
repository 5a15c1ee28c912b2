"""
BaseService: standard base class for kafka-provider services.

Provides:
- Logger
- Tracer
- Global AppConfig
- Construct-once startup and explicit, idempotent shutdown
- SIGINT/SIGTERM handling that routes into shutdown
"""

from __future__ import annotations

import signal
from abc import ABC, abstractmethod
from types import FrameType, TracebackType
from typing import Optional, Type

from libs.config import AppConfig
from libs.observability import get_logger, get_tracer


class BaseService(ABC):
    """
    Abstract base class for services.

    Subclasses receive ``self.config``, ``self.logger`` and ``self.tracer``
    and implement ``_start`` and ``_shutdown``. Observability is initialized
    by the entrypoint, not here.

    Usable as a context manager: ``start`` on enter, ``shutdown`` on exit.
    """

    def __init__(self, service_name: str, config: Optional[AppConfig] = None):
        self.service_name = service_name
        self.config = config or AppConfig.load()
        self.logger = get_logger(service_name)
        self.tracer = get_tracer(service_name)

        self._started = False
        self._stopped = False

    def start(self) -> None:
        """Start the service once; repeated calls are ignored."""
        if self._started:
            return
        self._start()
        self._started = True
        self.logger.info("Service started", extra={"service_name": self.service_name})

    def shutdown(self) -> None:
        """Release resources once; repeated calls are ignored."""
        if not self._started or self._stopped:
            return
        self._stopped = True
        self._shutdown()
        self.logger.info("Service stopped", extra={"service_name": self.service_name})

    def install_signal_handlers(self) -> None:
        """Route SIGINT and SIGTERM into ``shutdown``. Main thread only."""
        signal.signal(signal.SIGINT, self._on_signal)
        signal.signal(signal.SIGTERM, self._on_signal)

    def _on_signal(self, signum: int, _frame: Optional[FrameType]) -> None:
        self.logger.info("Shutdown signal received", extra={"signal": signum})
        self.shutdown()
        raise SystemExit(0)

    @abstractmethod
    def _start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def _shutdown(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "BaseService":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.shutdown()
