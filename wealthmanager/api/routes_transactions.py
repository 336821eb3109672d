from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from wealthmanager.models.db import get_db_session
from wealthmanager.models.schemas import MessageResponse, TransactionCreateRequest, TransactionResponse
from wealthmanager.services.errors import BadRequestError, StoreError
from wealthmanager.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("/", response_model=list[TransactionResponse], responses={500: {"model": MessageResponse}})
@router.get("", response_model=list[TransactionResponse], include_in_schema=False)
def list_transactions(db: Session = Depends(get_db_session)):
    service = TransactionService(db=db)
    try:
        return service.list_transactions()
    except StoreError as exc:
        logger.exception("Transaction listing failed", extra={"error": str(exc.__cause__)})
        raise HTTPException(status_code=500, detail=exc.message) from exc


@router.post(
    "/",
    response_model=TransactionResponse,
    status_code=201,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
@router.post("", response_model=TransactionResponse, status_code=201, include_in_schema=False)
def add_transaction(payload: TransactionCreateRequest, db: Session = Depends(get_db_session)):
    service = TransactionService(db=db)
    try:
        return service.create_transaction(title=payload.title, amount=payload.amount)
    except BadRequestError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except StoreError as exc:
        logger.exception("Transaction create failed", extra={"error": str(exc.__cause__)})
        raise HTTPException(status_code=500, detail=exc.message) from exc
