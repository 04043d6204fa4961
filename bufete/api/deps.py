# bufete/api/deps.py
from datetime import date
from typing import NamedTuple, Optional
from fastapi import Depends, HTTPException, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from bufete.core.config import settings
from bufete.core.security import decode_token
from bufete.services.document_service import today

security = HTTPBearer()

async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    # el token lo emite el proveedor de identidad; aquí solo se valida y se arma el actor
    try:
        payload = decode_token(credentials.credentials)
        sub = payload.get("sub")
        if not sub:
            raise ValueError()
    except Exception:
        raise HTTPException(status_code=401, detail="Credenciales inválidas")
    return {"id": sub, "full_name": payload.get("name") or sub}


class ExpiryParams(NamedTuple):
    now: date
    window_days: int

def expiry_params(
    as_of: Optional[date] = Query(None, description="Fecha de referencia (por defecto hoy, UTC)"),
    warning_window_days: Optional[int] = Query(None, ge=0, description="Días de aviso antes del vencimiento"),
) -> ExpiryParams:
    window = settings.document_warning_window_days if warning_window_days is None else warning_window_days
    return ExpiryParams(as_of or today(), window)
