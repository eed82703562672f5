from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import func

from common.db.base import Base, JSONType


class WorkflowLogEntity(Base):
    __tablename__ = "workflow_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(String(100), nullable=False, index=True)
    workflow_id = Column(String(255), nullable=False)
    workflow_run_id = Column(String(255), nullable=False)
    workflow_type = Column(String(255), nullable=True)
    agent = Column(String(255), nullable=True)
    participant_id = Column(String(255), nullable=True)

    level = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    properties = Column(JSONType, nullable=True)
    exception = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_workflow_logs_tenant_run_created", "tenant_id", "workflow_run_id", "created_at"),
    )
