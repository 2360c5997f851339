from prometheus_fastapi_instrumentator import Instrumentator

from tracker.core.config import settings
from tracker.core.logging import configure_logging
from . import app as tracker_app

configure_logging(settings.LOG_LEVEL)
app = tracker_app
instrumentator = Instrumentator(excluded_handlers=["/metrics", "/health"])
instrumentator.instrument(app).expose(app, include_in_schema=False)


@app.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}
