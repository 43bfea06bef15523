"""FastAPI application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from civimember.core.config import settings
from civimember.db.session import engine


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="CiviMember API",
    description="Membership reminders, membership payments and scheduled jobs",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Internal-Secret"],
)

# ============================================================================
# Routers
# ============================================================================

from civimember.routers import action_mappings, scheduled_jobs  # noqa: E402

# Scheduled reminder targets and recipient previews
app.include_router(action_mappings.router)

# Scheduled job registry
app.include_router(scheduled_jobs.router, prefix="/scheduled-jobs", tags=["scheduled-jobs"])

# Internal endpoints (cron - protected by INTERNAL_SECRET)
from civimember.routers import internal  # noqa: E402
app.include_router(internal.router)


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
