import logging

from fastapi import FastAPI

from heirloom.config import get_settings
from heirloom.db import init_db
from heirloom.routers.imports_router import router as imports_router
from heirloom.routers.profiles_router import router as profiles_router
from heirloom.services.startup_checks import StartupCheckResult, run_startup_preflight
from heirloom.version import get_app_version

app = FastAPI(title=get_settings().app_name)
STARTUP_RESULT = StartupCheckResult(ok=True, errors=[], warnings=[])


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.on_event("startup")
def on_startup() -> None:
    global STARTUP_RESULT
    configure_logging()
    init_db()
    STARTUP_RESULT = run_startup_preflight()
    for warning in STARTUP_RESULT.warnings:
        logging.getLogger(__name__).warning(warning)


@app.get("/api/health")
def health():
    return {
        "status": "ok" if STARTUP_RESULT.ok else "degraded",
        "app_name": get_settings().app_name,
        "app_version": get_app_version(),
        "default_max_generations": get_settings().default_max_generations,
        "startup_errors": STARTUP_RESULT.errors,
        "startup_warnings": STARTUP_RESULT.warnings,
    }


app.include_router(imports_router)
app.include_router(profiles_router)
