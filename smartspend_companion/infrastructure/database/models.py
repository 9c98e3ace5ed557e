"""SQLAlchemy ORM models for persisted purchase decisions"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, Numeric, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class PurchaseDecisionRecord(Base):
    """Purchase decision with the user's later feedback"""

    __tablename__ = "purchase_decision"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    item_name = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(64), nullable=False)
    desire_level = Column(Integer, nullable=False)
    urgency = Column(Integer, nullable=False)
    emotional_tag = Column(Text, nullable=True)
    recommendation = Column(String(16), nullable=False)
    confidence = Column(Float, nullable=False)
    reasoning = Column(Text, nullable=False)
    signals = Column(JSON, nullable=True)
    followed = Column(Boolean, nullable=True)
    regret_level = Column(Integer, nullable=True)  # 1-10, filled after purchase
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
