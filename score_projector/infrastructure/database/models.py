"""SQLAlchemy ORM models for stored simulations"""

import uuid
from sqlalchemy import Column, DateTime, Integer, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class SimulationRecord(Base):
    """Input profile and projection results from one simulation run"""

    __tablename__ = "simulation"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    app_id = Column(Text, nullable=False, index=True)
    user_id = Column(Text, nullable=False, index=True)
    scenario = Column(Text, nullable=False)
    projected_score = Column(Integer, nullable=False)
    input = Column(JSON, nullable=False)
    results = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
