"""Orphan sweeper: reclaim objects no attachment row references.

Best-effort deletes (after remove, replace and cascade) can fail and leave
objects behind. The sweeper lists an owner folder, subtracts every object
referenced by a live row, and deletes what remains, skipping objects
younger than the grace period so in-flight uploads (uploaded, row not yet
committed) are never reclaimed. Rows are never touched.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from src.core.enums import ErrorCode
from src.core.errors import DomainError, InternalError
from src.core.result import Failure, Result, Success
from src.domain.enums import AttachmentOwner
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.object_store_protocol import ObjectStoreProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory


@dataclass(slots=True, kw_only=True)
class SweepReport:
    """Outcome of one sweep.

    Attributes:
        scanned: Objects listed in the folder.
        referenced: Listed objects still referenced by a row.
        too_recent: Unreferenced objects inside the grace period.
        deleted: Object ids deleted.
        failed: Object ids whose delete failed (retried next sweep).
    """

    owner: AttachmentOwner
    scanned: int = 0
    referenced: int = 0
    too_recent: int = 0
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class OrphanSweeper:
    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        object_store: ObjectStoreProtocol,
        logger: LoggerProtocol,
        grace_period: timedelta,
    ) -> None:
        self._uow_factory = uow_factory
        self._store = object_store
        self._logger = logger
        self._grace_period = grace_period

    async def sweep(self, owner: AttachmentOwner) -> Result[SweepReport, DomainError]:
        """Delete unreferenced objects older than the grace period in owner's folder.

        Returns:
            Success(SweepReport), Failure(UpstreamUnavailableError) if the
            listing fails, or Failure(InternalError) if rows cannot be read.
        """
        log = self._logger.bind(owner=owner.value, folder=owner.folder)
        report = SweepReport(owner=owner)

        # Listing before reading rows: an object uploaded after the listing is
        # not considered; one whose row commits after it is protected by age.
        listed = await self._store.list_objects(owner.folder)
        if isinstance(listed, Failure):
            log.warning("orphan_sweep_listing_failed", error_code=listed.error.code.value)
            return listed

        try:
            async with self._uow_factory() as uow:
                urls = await uow.attachments(owner).all_urls()
        except Exception as e:
            log.error("orphan_sweep_rows_failed", error=e)
            return Failure(
                error=InternalError(
                    code=ErrorCode.INTERNAL_ERROR,
                    message="Reading attachment rows failed",
                )
            )

        referenced_ids = {
            object_id
            for object_id in (self._store.object_id_from_url(url) for url in urls)
            if object_id is not None
        }
        cutoff = datetime.now(UTC) - self._grace_period

        for info in listed.value:
            report.scanned += 1
            if info.object_id in referenced_ids:
                report.referenced += 1
                continue
            if info.last_modified > cutoff:
                report.too_recent += 1
                continue

            deleted = await self._store.delete(info.object_id)
            if isinstance(deleted, Failure):
                report.failed.append(info.object_id)
            else:
                report.deleted.append(info.object_id)

        log.info(
            "orphan_sweep_completed",
            scanned=report.scanned,
            referenced=report.referenced,
            too_recent=report.too_recent,
            deleted=len(report.deleted),
            failed=len(report.failed),
        )
        return Success(value=report)
