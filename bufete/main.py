# bufete/main.py
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.errors import RateLimitExceeded

from bufete.api.router import api_router
from bufete.core.config import settings
from bufete.core.db import close_db
from bufete.core.errors import DomainError, domain_error_handler
from bufete.core.indexes import startup_tasks
from bufete.core.rate_limit import limiter, rate_limit_handler

# ---- Logging ----
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# --- CORS: fusiona .env + defaults de desarrollo ---
defaults = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
}
CORS_ORIGINS = sorted(set((settings.cors_origins or []) + list(defaults)))

app = FastAPI(title=settings.app_name, version=settings.app_version)

# --- IMPORTANTE: CORS primero ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1024)

# SlowAPI: limiter de escrituras
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

# IllegalTransition / InvalidHours -> respuesta JSON con detail
app.add_exception_handler(DomainError, domain_error_handler)

app.include_router(api_router)

@app.get("/health")
async def health():
    return {"ok": True}

@app.get("/ready")
async def ready():
    return {"ready": True}

# Índices y migraciones en startup (idempotente)
@app.on_event("startup")
async def startup():
    await startup_tasks()
    logger.info("%s %s listo (db=%s)", settings.app_name, settings.app_version, settings.db_name)

@app.on_event("shutdown")
async def shutdown_db_client():
    await close_db()

# Runner local opcional
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bufete.main:app", reload=True, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
