import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
# HTTP library debug logs off
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ database lifecycle
from database.db import init_db, close_db

# ✅ routers
from routers import (
    academic_rankings, admin, auth, class_students, class_subjects,
    classes, grades, school_years, student_grades, students, subjects, teachers,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (browser client)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ request latency (X-Latency-Ms response header)
app.add_middleware(TimingMiddleware)

# ✅ global error handlers (one JSON error envelope)
add_error_handlers(app)

# ✅ /api prefix for every router
app.include_router(auth.router,              prefix="/api")
app.include_router(school_years.router,      prefix="/api")
app.include_router(students.router,          prefix="/api")
app.include_router(teachers.router,          prefix="/api")
app.include_router(subjects.router,          prefix="/api")
app.include_router(classes.router,           prefix="/api")
app.include_router(class_subjects.router,    prefix="/api")
app.include_router(class_students.router,    prefix="/api")
app.include_router(grades.router,            prefix="/api")
app.include_router(academic_rankings.router, prefix="/api")   # ✅ rankings / quarter check
app.include_router(student_grades.router,    prefix="/api")   # ✅ report card
app.include_router(admin.router,             prefix="/api")   # ✅ admin grade sheet


# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.on_event("startup")
def _startup():
    if settings.DB_CREATE_TABLES:
        init_db()
    logger.info("%s %s started (%s)", settings.APP_TITLE, settings.APP_VERSION, settings.ENV)


@app.on_event("shutdown")
def _shutdown():
    close_db()


# ✅ root
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.ENV == "dev")
