# bufete/api/router.py
from fastapi import APIRouter
from bufete.api.routes import clients, opportunities, matters, documents, metrics

api_router = APIRouter(prefix="/api")
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(opportunities.router, prefix="/opportunities", tags=["opportunities"])
api_router.include_router(matters.router, prefix="/matters", tags=["matters"])
api_router.include_router(documents.router, tags=["documents"])
api_router.include_router(metrics.router, tags=["metrics"])
