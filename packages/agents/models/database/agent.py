from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from common.db.base import Base


class AgentEntity(Base):
    __tablename__ = "agents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    permissions = relationship(
        "AgentPermissionEntity",
        back_populates="agent",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_agents_tenant_name"),)


class AgentPermissionEntity(Base):
    __tablename__ = "agent_permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    agent_id = Column(
        Integer, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(255), nullable=False, index=True)
    # owner, write or read
    level = Column(String(20), nullable=False)

    agent = relationship("AgentEntity", back_populates="permissions")

    __table_args__ = (
        UniqueConstraint("agent_id", "user_id", "level", name="uq_agent_permission"),
    )
