"""
Mood detection service: mounts the frame, classify and queue routes.
"""
import logging
from fastapi import FastAPI
from api.routes import router, settings
from core.models import CATEGORIES

logging.basicConfig(level=settings.LOG_LEVEL)
app = FastAPI(title="Mood Detection API", version="1.0.0")
app.include_router(router)

@app.get("/health")
def health() -> dict:
    """Liveness check; also reports the mood labels this build can emit."""
    return {"status": "ok", "categories": list(CATEGORIES)}
