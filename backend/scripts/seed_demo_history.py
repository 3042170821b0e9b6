from datetime import datetime, timedelta, timezone
import random

from grecko.db import Base, SessionLocal, engine
from grecko.models.academic_goal import AcademicGoal
from grecko.models.gpa_history import GpaHistory
from grecko.schemas.goal import GoalState

DEMO_USER = "demo-student"


def clear_demo_user(db, user_id: str = DEMO_USER) -> None:
    """Delete the demo user's goals and history so we can reseed cleanly."""
    db.query(GpaHistory).filter(GpaHistory.user_id == user_id).delete()
    db.query(AcademicGoal).filter(AcademicGoal.user_id == user_id).delete()
    db.commit()


def seed_demo_history(db, user_id: str = DEMO_USER) -> None:
    """Insert six monthly calculator snapshots and a matching goal row."""
    now = datetime.now(timezone.utc)
    gpa = round(random.uniform(2.6, 3.0), 2)

    rows = []
    for month in range(6):
        created = now - timedelta(days=30 * (5 - month))
        gpa = round(min(4.0, gpa + random.uniform(-0.1, 0.25)), 2)
        rows.append(
            GpaHistory(
                user_id=user_id,
                gpa=gpa,
                label=f"Calc {created.strftime('%b')} {created.day}",
                created_at=created,
            )
        )
    db.add_all(rows)

    state = GoalState(target_gpa=3.5).with_inputs(
        current_gpa=gpa, courses_taken=18, total_courses=40
    )
    db.add(AcademicGoal(user_id=user_id, **state.model_dump()))
    db.commit()

    print(f"Seeded {len(rows)} history rows for {user_id} (required {state.required_gpa})")


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_demo_user(db)
        seed_demo_history(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
