from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from grecko.api.session import router as session_router
from grecko.api.goals import router as goals_router
from grecko.api.gpa import router as gpa_router
from grecko.db import Base, engine, SessionLocal
from grecko.models.academic_goal import AcademicGoal  # noqa: F401  (import ensures table is registered)
from grecko.models.gpa_history import GpaHistory  # noqa: F401
from grecko.core.app_logger import setup_logging
from grecko.core.config import settings
from grecko.services.session import SessionRegistry
from grecko.services.store import GoalStore


setup_logging(settings.log_level)

app = FastAPI(title="Grecko GPA Hub")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (academic_goals, gpa_history) on startup
Base.metadata.create_all(bind=engine)

# Goal sessions live for the lifetime of the process
app.state.store = GoalStore(SessionLocal)
app.state.sessions = SessionRegistry(idle_seconds=settings.session_idle_seconds)

app.include_router(session_router)
app.include_router(goals_router)
app.include_router(gpa_router)


@app.get("/")
def root():
    return {"message": "Grecko backend is running"}
