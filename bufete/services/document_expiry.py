# bufete/services/document_expiry.py
from datetime import date, datetime, timedelta
from typing import Optional

from bufete.models.common import ExpiryStatus

DEFAULT_WARNING_WINDOW_DAYS = 30


def _as_date(value) -> date:
    # solo importa el día, nunca la hora
    if isinstance(value, datetime):
        return value.date()
    return value


def classify(expiration_date: Optional[date], now: date, warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS) -> ExpiryStatus:
    """Clasifica un documento según su fecha de vencimiento respecto a `now`.

    - sin fecha                          -> none
    - vence antes de hoy                 -> expired
    - vence hoy o dentro de la ventana   -> expiring_soon
    - resto                              -> valid
    """
    if warning_window_days < 0:
        raise ValueError("warning_window_days debe ser >= 0")
    if expiration_date is None:
        return ExpiryStatus.NONE
    exp = _as_date(expiration_date)
    today = _as_date(now)
    if exp < today:
        return ExpiryStatus.EXPIRED
    if exp < today + timedelta(days=warning_window_days):
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.VALID
