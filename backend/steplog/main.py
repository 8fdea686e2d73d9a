import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from steplog.config import settings
from steplog.routers import upload

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Step Log Analyzer", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload.router, prefix="/api")


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
