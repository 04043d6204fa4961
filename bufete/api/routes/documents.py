# bufete/api/routes/documents.py
from fastapi import APIRouter, Depends, Request
from bufete.api.deps import ExpiryParams, expiry_params, get_current_user
from bufete.core.rate_limit import limiter, WRITE_LIMIT
from bufete.models.document import DocumentCreate
from bufete.services import document_service as svc

router = APIRouter()

@router.post("/clients/{client_id}/documents", status_code=201)
@limiter.limit(WRITE_LIMIT)
async def register_document(
    request: Request, client_id: str, payload: DocumentCreate,
    exp: ExpiryParams = Depends(expiry_params), current=Depends(get_current_user),
):
    return await svc.register(client_id, payload, current, exp.now, exp.window_days)

@router.get("/clients/{client_id}/documents")
async def list_documents(client_id: str, exp: ExpiryParams = Depends(expiry_params), current=Depends(get_current_user)):
    return {"items": await svc.list_for_client(client_id, exp.now, exp.window_days)}

@router.get("/documents/expiring")
async def expiring_documents(exp: ExpiryParams = Depends(expiry_params), current=Depends(get_current_user)):
    return await svc.expiring(exp.now, exp.window_days)

@router.delete("/documents/{document_id}")
@limiter.limit(WRITE_LIMIT)
async def delete_document(request: Request, document_id: str, current=Depends(get_current_user)):
    await svc.delete(document_id)
    return {"ok": True}
