from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func
from grecko.db import Base


class AcademicGoal(Base):
    __tablename__ = "academic_goals"

    # Opaque id from the identity provider, one row per user
    user_id = Column(String, primary_key=True, index=True, nullable=False)

    current_gpa = Column(Float, nullable=False, server_default="0")
    target_gpa = Column(Float, nullable=False, server_default="4")
    courses_taken = Column(Integer, nullable=False, server_default="0")
    total_courses = Column(Integer, nullable=False, server_default="0")

    # Derived on every edit; stored so other clients can read them back
    courses_remaining = Column(Integer, nullable=False, server_default="0")
    required_gpa = Column(String(16), nullable=False, server_default="0.00")

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
