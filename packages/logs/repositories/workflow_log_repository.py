from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.logs.models.database.workflow_log import WorkflowLogEntity
from packages.logs.models.domain.workflow_log import (
    WorkflowLogCreateModel,
    WorkflowLogModel,
)

logger = get_logger(__name__)


class WorkflowLogRepository(BaseRepository[WorkflowLogEntity, WorkflowLogModel]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(WorkflowLogEntity, WorkflowLogModel, db_session)

    @trace_span
    async def create(self, log: WorkflowLogCreateModel) -> WorkflowLogModel:
        values = log.model_dump(exclude_none=True)
        entity = self.entity_class(**values)
        async with self._get_session() as session:
            session.add(entity)
            await session.flush()
            await session.refresh(entity)
            return self._entity_to_domain(entity)

    @trace_span
    async def get_last_log_per_run(
        self,
        tenant_id: str,
        run_ids: Optional[List[str]] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> Dict[str, WorkflowLogModel]:
        """Most recent log record of each run, keyed by run id.

        Restricted to the tenant and to either a set of run ids or a
        created_at range (both bounds optional).
        """
        if run_ids is not None and not run_ids:
            return {}

        ranked = select(
            self.entity_class.id.label("id"),
            func.row_number()
            .over(
                partition_by=self.entity_class.workflow_run_id,
                order_by=(
                    self.entity_class.created_at.desc(),
                    self.entity_class.id.desc(),
                ),
            )
            .label("rank"),
        ).where(self.entity_class.tenant_id == tenant_id)

        if run_ids is not None:
            ranked = ranked.where(self.entity_class.workflow_run_id.in_(run_ids))
        if start_time is not None:
            ranked = ranked.where(self.entity_class.created_at >= start_time)
        if end_time is not None:
            ranked = ranked.where(self.entity_class.created_at <= end_time)

        latest = ranked.subquery()
        query = (
            select(self.entity_class)
            .join(latest, latest.c.id == self.entity_class.id)
            .where(latest.c.rank == 1)
        )

        async with self._get_session() as session:
            result = await session.execute(query)
            logs = self._entities_to_domain(list(result.scalars().all()))

        logger.debug(f"Found last logs for {len(logs)} runs in tenant {tenant_id}")
        return {log.workflow_run_id: log for log in logs}
