"""Scan loop for monitored projects.

ProjectMonitor runs one project's scans back to back: wait while paused,
scan, then block until the configured interval after the scan started has
elapsed. MonitorSupervisor runs one ProjectMonitor per project, each on
its own thread; projects share no mutable state.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from filemon.config.models import ProjectConfig
from filemon.core.datetime_utils import format_local_time, utc_now
from filemon.exceptions import ScanIoError
from filemon.logging.context import project_context
from filemon.monitor.signals import MarkerFileSignals, ScanSignals
from filemon.scanner.orchestrator import ScanOutcome, perform_scan
from filemon.store.summary_store import SummaryStore

logger = logging.getLogger(__name__)

DEFAULT_PAUSE_RETRY_SECONDS = 30.0


class ProjectMonitor:
    """Periodically scans a single project."""

    def __init__(
        self,
        project: ProjectConfig,
        store: SummaryStore,
        signals: ScanSignals,
        *,
        pause_retry_seconds: float = DEFAULT_PAUSE_RETRY_SECONDS,
        stop_event: threading.Event | None = None,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the monitor.

        Args:
            project: Project to scan.
            store: Where the project's summary is persisted.
            signals: Pause and generation-pass signals.
            pause_retry_seconds: Seconds between checks while paused.
            stop_event: Event that ends the loop when set. Shared between
                monitors so one signal stops them all.
            now: Clock used for scan records and log messages.
        """
        self.project = project
        self.store = store
        self.signals = signals
        self.pause_retry_seconds = pause_retry_seconds
        self.stop_event = stop_event or threading.Event()
        self.now = now
        self.scans_completed = 0
        self.scans_failed = 0

    def stop(self) -> None:
        """Request the loop to end; waits in progress return immediately."""
        self.stop_event.set()

    def _wait_while_paused(self) -> bool:
        """Block while the project is paused.

        Returns:
            False if a stop was requested while waiting, True otherwise.
        """
        while self.signals.is_paused():
            next_try = self.now() + timedelta(seconds=self.pause_retry_seconds)
            logger.info("Paused: next try at %s", format_local_time(next_try))
            if self.stop_event.wait(self.pause_retry_seconds):
                return False
        return True

    def run_cycle(self, next_scan_time: datetime | None = None) -> ScanOutcome | None:
        """Run one scan, honouring pause and generation signals.

        A failed scan is logged and skipped; the persisted summary stays as
        it was and the next cycle tries again. The generation request is
        only cleared once a scan has been persisted.

        Returns:
            The scan outcome, or None if the scan failed or a stop was
            requested while paused.

        Raises:
            CorruptStateError: If the persisted summary cannot be loaded.
        """
        if not self._wait_while_paused():
            return None

        is_gen = self.signals.is_gen_requested()
        try:
            outcome = perform_scan(self.project, is_gen, store=self.store, now=self.now)
        except ScanIoError as e:
            self.scans_failed += 1
            logger.error("Scan failed, will retry next cycle: %s", e)
            return None

        if is_gen:
            self.signals.clear_gen_request()
        self.scans_completed += 1

        if next_scan_time is not None:
            logger.info("Scan done: next scan at %s", format_local_time(next_scan_time))
        return outcome

    def run(self, max_cycles: int | None = None) -> None:
        """Scan repeatedly until stopped.

        Each scan starts no earlier than the project's interval after the
        previous one started.

        Args:
            max_cycles: Stop after this many cycles (None = run until stopped).

        Raises:
            ScanIoError: If the project root does not exist at startup.
            CorruptStateError: If the persisted summary cannot be loaded.
        """
        interval = self.project.interval_seconds
        with project_context(self.project.name):
            if not self.project.root.is_dir():
                raise ScanIoError(
                    self.project.root, f"Project root not found: {self.project.root}"
                )
            logger.info("Monitor started: interval=%gs", interval)

            cycles = 0
            while not self.stop_event.is_set():
                started = time.monotonic()
                next_scan_time = self.now() + timedelta(seconds=interval)
                self.run_cycle(next_scan_time)

                cycles += 1
                if max_cycles is not None and cycles >= max_cycles:
                    break

                remaining = interval - (time.monotonic() - started)
                if remaining > 0 and self.stop_event.wait(remaining):
                    break

            logger.info(
                "Monitor stopped: %d scan(s) completed, %d failed",
                self.scans_completed,
                self.scans_failed,
            )


class MonitorSupervisor:
    """Runs one ProjectMonitor thread per project."""

    def __init__(
        self,
        store: SummaryStore,
        projects: Iterable[ProjectConfig] = (),
        *,
        pause_retry_seconds: float = DEFAULT_PAUSE_RETRY_SECONDS,
        signals_factory: Callable[[ProjectConfig], ScanSignals] | None = None,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the supervisor.

        Args:
            store: Summary store shared by all projects (each project writes
                only its own file).
            projects: Projects to monitor.
            pause_retry_seconds: Seconds between checks while paused.
            signals_factory: Builds each project's signals. Defaults to
                marker files in the project's history directory.
            now: Clock passed to every monitor.
        """
        self.store = store
        self.pause_retry_seconds = pause_retry_seconds
        self.signals_factory = signals_factory or (
            lambda project: MarkerFileSignals(store.project_dir(project.name))
        )
        self.now = now
        self.stop_event = threading.Event()
        self.projects: dict[str, ProjectConfig] = {}
        self.monitors: dict[str, ProjectMonitor] = {}
        self.failures: dict[str, BaseException] = {}
        self._threads: list[threading.Thread] = []
        self._failures_lock = threading.Lock()
        for project in projects:
            self.add_project(project)

    def add_project(self, project: ProjectConfig) -> None:
        """Add a project to monitor.

        Raises:
            ValueError: If a project with the same name was already added.
        """
        if project.name in self.projects:
            raise ValueError(f"Duplicate project: {project.name}")
        self.projects[project.name] = project

    def _run_monitor(self, monitor: ProjectMonitor, max_cycles: int | None) -> None:
        try:
            monitor.run(max_cycles=max_cycles)
        except Exception as e:
            with project_context(monitor.project.name):
                logger.exception("Monitor stopped on error: %s", e)
            with self._failures_lock:
                self.failures[monitor.project.name] = e

    def start(self, max_cycles: int | None = None) -> None:
        """Start one thread per project."""
        self.store.history_dir.mkdir(parents=True, exist_ok=True)
        for name, project in self.projects.items():
            monitor = ProjectMonitor(
                project,
                self.store,
                self.signals_factory(project),
                pause_retry_seconds=self.pause_retry_seconds,
                stop_event=self.stop_event,
                now=self.now,
            )
            self.monitors[name] = monitor
            thread = threading.Thread(
                target=self._run_monitor,
                args=(monitor, max_cycles),
                name=f"monitor-{name}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()
        logger.info("Started %d project monitor(s)", len(self._threads))

    def stop(self) -> None:
        """Ask every monitor to stop."""
        self.stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        """Wait for monitor threads to finish."""
        for thread in self._threads:
            thread.join(timeout)

    def is_alive(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def run(self, max_cycles: int | None = None) -> None:
        """Start all monitors and wait for them to finish."""
        self.start(max_cycles=max_cycles)
        self.join()
