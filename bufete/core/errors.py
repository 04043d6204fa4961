# bufete/core/errors.py
from fastapi import Request
from fastapi.responses import JSONResponse


class DomainError(Exception):
    """Fallo de validación local del núcleo de reglas."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class IllegalTransition(DomainError):
    status_code = 400

    def __init__(self, current: str, target: str):
        super().__init__(f"Transición no permitida: {str(current)} → {str(target)}")
        self.current = current
        self.target = target


class InvalidHours(DomainError):
    status_code = 422

    def __init__(self, hours):
        super().__init__(f"Las horas deben ser > 0 (recibido: {hours})")
        self.hours = hours


async def domain_error_handler(_: Request, exc: DomainError):
    # mismo formato que HTTPException para que el front no distinga
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
