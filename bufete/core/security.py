# bufete/core/security.py
from datetime import datetime, timedelta, timezone
import jwt
from bufete.core.config import settings

# Los tokens los emite el proveedor de identidad; aquí solo se validan.
# create_access_token queda para scripts de soporte y tests.

def create_access_token(sub: str, name: str, minutes: int = 30) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode({"sub": sub, "name": name, "exp": expire}, settings.secret_key, algorithm=settings.algorithm)

def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
