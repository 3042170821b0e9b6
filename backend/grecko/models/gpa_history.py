from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func
from grecko.db import Base


class GpaHistory(Base):
    __tablename__ = "gpa_history"

    # Insertion order; breaks ties between rows created in the same instant
    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(String, nullable=False, index=True)

    gpa = Column(Float, nullable=False)
    # Semester name or "Calc Nov 12"; readers fall back to the date if empty
    label = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
