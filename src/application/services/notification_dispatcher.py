"""Notification dispatcher: best-effort templated email fan-out.

Notifications are a side effect of a committed mutation. They must never
change the mutation's result, so neither notify() nor dispatch() raises and
neither reports failure to the caller beyond a NotificationReport.

Two entry points:
    - notify(): render and send now, return a per-recipient report.
    - dispatch(): enqueue on a bounded queue served by a background worker;
      the caller returns immediately. A full queue drops the job.

Usage:
    dispatcher = NotificationDispatcher(
        renderer=renderer,
        transport=transport,
        logger=logger,
        sender="Fundkeeper <no-reply@fundkeeper.local>",
        mail_enabled=True,
    )
    dispatcher.start()
    dispatcher.dispatch("contribution.updated", [member.email], "contribution.updated", data)
    ...
    await dispatcher.stop(drain_timeout=10.0)
"""

import asyncio
import contextlib
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from src.core.constants import NOTIFICATION_STOP_TIMEOUT_SECONDS
from src.core.result import Failure
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.mail_transport_protocol import MailTransportProtocol
from src.domain.protocols.template_renderer_protocol import TemplateRendererProtocol


def normalize_recipients(recipients: Iterable[str | None]) -> list[str]:
    """Strip, drop blanks and de-duplicate (case-insensitive), keeping order."""
    seen: set[str] = set()
    normalized: list[str] = []
    for recipient in recipients:
        if recipient is None:
            continue
        address = recipient.strip()
        if not address or address.lower() in seen:
            continue
        seen.add(address.lower())
        normalized.append(address)
    return normalized


@dataclass(frozen=True, slots=True, kw_only=True)
class NotificationJob:
    """One queued notification."""

    event: str
    recipients: tuple[str, ...]
    template_key: str
    data: dict[str, Any]


@dataclass(slots=True, kw_only=True)
class NotificationReport:
    """Outcome of one notify() call.

    Attributes:
        event: Triggering event name.
        template_key: Template that was (or would have been) rendered.
        delivered: Recipient → provider message id.
        failed: Recipient → failure message.
        skipped_reason: Set when nothing was sent ("no_recipients",
            "mail_disabled"); delivered and failed are then empty.
    """

    event: str
    template_key: str
    delivered: dict[str, str] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


@dataclass(slots=True)
class DispatcherStats:
    """Running counters (per recipient for delivered/failed, per job for dropped)."""

    delivered: int = 0
    failed: int = 0
    dropped: int = 0


class NotificationDispatcher:
    """Render, fan out and deliver notifications without ever raising.

    Args:
        renderer: Template renderer.
        transport: Mail transport (one message per recipient).
        logger: Structured logger.
        sender: From address.
        mail_enabled: When False every send is skipped with an info log.
        queue_size: Capacity of the dispatch() queue.
        concurrency: Max in-flight sends per notification.
    """

    def __init__(
        self,
        renderer: TemplateRendererProtocol,
        transport: MailTransportProtocol,
        logger: LoggerProtocol,
        *,
        sender: str,
        mail_enabled: bool = True,
        queue_size: int = 1000,
        concurrency: int = 10,
    ) -> None:
        self._renderer = renderer
        self._transport = transport
        self._logger = logger
        self._sender = sender
        self._mail_enabled = mail_enabled
        self._concurrency = concurrency
        self._queue: asyncio.Queue[NotificationJob] = asyncio.Queue(maxsize=queue_size)
        self._worker: asyncio.Task[None] | None = None
        self._stats = DispatcherStats()

    @property
    def stats(self) -> DispatcherStats:
        return self._stats

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def notify(
        self,
        event: str,
        recipients: Iterable[str | None],
        template_key: str,
        data: dict[str, Any],
    ) -> NotificationReport:
        """Render once and send to each recipient concurrently.

        A failing recipient never affects the others. Rendering failures
        mark every recipient failed.
        """
        report = NotificationReport(event=event, template_key=template_key)
        log = self._logger.bind(notification_event=event, template_key=template_key)

        try:
            addresses = normalize_recipients(recipients)
            if not addresses:
                report.skipped_reason = "no_recipients"
                log.info("notification_skipped", reason=report.skipped_reason)
                return report

            if not self._mail_enabled:
                report.skipped_reason = "mail_disabled"
                log.info(
                    "notification_skipped",
                    reason=report.skipped_reason,
                    recipient_count=len(addresses),
                )
                return report

            try:
                rendered = self._renderer.render(template_key, data)
            except Exception as e:
                log.error("notification_render_failed", error=e)
                for address in addresses:
                    report.failed[address] = "render_failed"
                return report

            semaphore = asyncio.Semaphore(self._concurrency)

            async def send_one(address: str) -> Any:
                async with semaphore:
                    return await self._transport.send(
                        self._sender, address, rendered.subject, rendered.html
                    )

            # return_exceptions=True isolates one recipient's failure from the rest
            outcomes = await asyncio.gather(
                *(send_one(address) for address in addresses),
                return_exceptions=True,
            )

            for address, outcome in zip(addresses, outcomes, strict=True):
                if isinstance(outcome, BaseException):
                    report.failed[address] = f"{type(outcome).__name__}: {outcome}"
                elif isinstance(outcome, Failure):
                    report.failed[address] = outcome.error.message
                else:
                    report.delivered[address] = outcome.value

            if report.failed:
                log.warning(
                    "notification_partially_failed",
                    delivered=len(report.delivered),
                    failed=len(report.failed),
                )
            else:
                log.info("notification_delivered", delivered=len(report.delivered))
            return report
        except Exception as e:
            log.error("notification_failed", error=e)
            return report
        finally:
            self._stats.delivered += len(report.delivered)
            self._stats.failed += len(report.failed)

    def dispatch(
        self,
        event: str,
        recipients: Iterable[str | None],
        template_key: str,
        data: dict[str, Any],
    ) -> bool:
        """Enqueue a notification for the background worker.

        Returns:
            True if queued, False if the queue was full and the job dropped.
        """
        job = NotificationJob(
            event=event,
            recipients=tuple(r for r in recipients if r is not None),
            template_key=template_key,
            data=dict(data),
        )
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            self._stats.dropped += 1
            self._logger.warning(
                "notification_dropped",
                notification_event=event,
                template_key=template_key,
                queue_size=self._queue.maxsize,
            )
            return False
        return True

    def start(self) -> None:
        """Start the background worker. No-op if already running.

        Must be called with a running event loop.
        """
        if self.is_running:
            self._logger.warning("notification_worker_already_running")
            return
        self._worker = asyncio.create_task(self._run_worker(), name="notification-worker")
        self._logger.info("notification_worker_started")

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        await self._queue.join()

    async def stop(self, drain_timeout: float = NOTIFICATION_STOP_TIMEOUT_SECONDS) -> None:
        """Drain the queue (bounded by drain_timeout), then cancel the worker."""
        if self.is_running and drain_timeout > 0:
            try:
                await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
            except TimeoutError:
                self._logger.warning(
                    "notification_drain_timeout",
                    pending=self._queue.qsize(),
                    drain_timeout=drain_timeout,
                )

        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
        self._worker = None
        self._logger.info(
            "notification_worker_stopped",
            delivered=self._stats.delivered,
            failed=self._stats.failed,
            dropped=self._stats.dropped,
        )

    async def _run_worker(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.notify(job.event, job.recipients, job.template_key, job.data)
            except Exception as e:
                # notify() does not raise; keep the worker alive regardless
                self._logger.error("notification_worker_error", error=e)
            finally:
                self._queue.task_done()
