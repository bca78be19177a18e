"""Conversion history routes, partitioned by the authenticated user."""

from fastapi import APIRouter, Depends

from api.dependencies import get_history_repo
from api.models import HistoryItem, HistoryListResponse, HistoryRequest, SuccessResponse
from api.security import get_current_claims
from domain.model.identity import Claims
from port.history_repository import HistoryRepository
from services import history_service

router = APIRouter(prefix="/main", tags=["history"])


@router.get("", response_model=HistoryListResponse)
async def list_history(
    claims: Claims = Depends(get_current_claims),
    repo: HistoryRepository = Depends(get_history_repo),
):
    entries = history_service.list_history(repo, claims.user_id)
    return HistoryListResponse(history=[HistoryItem.from_entry(e) for e in entries])


@router.post("", response_model=SuccessResponse)
async def add_history(
    request: HistoryRequest,
    claims: Claims = Depends(get_current_claims),
    repo: HistoryRepository = Depends(get_history_repo),
):
    history_service.add_history(
        repo,
        claims.user_id,
        request.from_currency,
        request.to_currency,
        request.amount,
        request.result,
    )
    return SuccessResponse()


@router.delete("/{history_id}", response_model=SuccessResponse)
async def delete_history(
    history_id: int,
    claims: Claims = Depends(get_current_claims),
    repo: HistoryRepository = Depends(get_history_repo),
):
    history_service.delete_history(repo, claims.user_id, history_id)
    return SuccessResponse()
