# bufete/api/routes/metrics.py
from fastapi import APIRouter, Depends
from bufete.api.deps import ExpiryParams, expiry_params, get_current_user
from bufete.services.metrics_service import dashboard

router = APIRouter()

@router.get("/dashboard")
async def dashboard_summary(exp: ExpiryParams = Depends(expiry_params), _user=Depends(get_current_user)):
    return await dashboard(exp.now, exp.window_days)
