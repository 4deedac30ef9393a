from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base

from INJECTABLES.server.utils.constants import INJECTION_TEMPLATES_TABLE


Base = declarative_base()


###############################################################################
class InjectionTemplate(Base):
    __tablename__ = INJECTION_TEMPLATES_TABLE
    id = Column(Integer, primary_key=True, autoincrement=True)
    template_name = Column(String(250), nullable=False)
    injection_name = Column(String(250), nullable=False)
    generic_name = Column(String(250))
    dose = Column(String(100))
    route = Column(String(50))
    infusion_rate = Column(String(100))
    frequency = Column(String(100))
    duration = Column(String(100))
    timing = Column(String(100))
    instructions = Column(Text)
    source_code = Column(String(32))
    usage_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    __table_args__ = (UniqueConstraint("template_name"),)
