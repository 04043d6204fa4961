# bufete/core/config.py
from typing import List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === App ===
    app_name: str = Field(default="Bufete CRM Backend", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # === MongoDB ===
    mongo_url: str = Field(default="mongodb://localhost:27017", validation_alias="MONGO_URL")
    db_name: str = Field(default="bufete", validation_alias="DB_NAME")
    mongo_tls: bool = Field(default=False, validation_alias="MONGO_TLS")

    # === Seguridad / JWT (solo validación; la sesión la emite el proveedor de identidad) ===
    secret_key: str = Field(default="change-me", validation_alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", validation_alias="ALGORITHM")

    # === Rate limit de escrituras ===
    write_rate_limit: str = Field(default="30/minute", validation_alias="WRITE_RATE_LIMIT")

    # === CORS ===
    # Acepta JSON (["http://a","https://b"]) o lista separada por comas ("http://a,https://b")
    cors_origins: Union[str, List[str]] = Field(default="", validation_alias="CORS_ORIGINS")

    # === Paginación ===
    max_page_size: int = Field(default=50, validation_alias="MAX_PAGE_SIZE")

    # === Documentos ===
    # días antes del vencimiento en que un documento pasa a "por vencer"
    document_warning_window_days: int = Field(default=30, ge=0, validation_alias="DOCUMENT_WARNING_WINDOW_DAYS")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    data = json.loads(s)
                    if isinstance(data, list):
                        return [str(x).strip() for x in data if str(x).strip()]
                except ValueError:
                    # si parece JSON pero está mal formado, caemos al split por comas
                    pass
            return [item.strip() for item in s.split(",") if item.strip()]
        return [str(v).strip()] if str(v).strip() else []


# Instancia global usada por main.py y los servicios
settings = Settings()
