from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from wealthmanager.models.db import get_db_session
from wealthmanager.models.schemas import (
    AllocationResponse,
    HoldingResponse,
    MessageResponse,
    PerformanceResponse,
    SummaryResponse,
)
from wealthmanager.services.errors import NotFoundError, StoreError
from wealthmanager.services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])

_ERROR_RESPONSES = {404: {"model": MessageResponse}, 500: {"model": MessageResponse}}


@router.get("/holdings", response_model=list[HoldingResponse], responses=_ERROR_RESPONSES)
def get_holdings(db: Session = Depends(get_db_session)):
    service = PortfolioService(db=db)
    try:
        return service.get_holdings()
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except StoreError as exc:
        logger.exception("Holdings query failed", extra={"error": str(exc.__cause__)})
        raise HTTPException(status_code=500, detail=exc.message) from exc


@router.get("/allocation", response_model=AllocationResponse, responses=_ERROR_RESPONSES)
def get_allocation(db: Session = Depends(get_db_session)):
    service = PortfolioService(db=db)
    try:
        return service.get_allocation()
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except StoreError as exc:
        logger.exception("Allocation query failed", extra={"error": str(exc.__cause__)})
        raise HTTPException(status_code=500, detail=exc.message) from exc


@router.get("/performance", response_model=PerformanceResponse, responses=_ERROR_RESPONSES)
def get_performance(db: Session = Depends(get_db_session)):
    service = PortfolioService(db=db)
    try:
        return service.get_performance()
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except StoreError as exc:
        logger.exception("Performance query failed", extra={"error": str(exc.__cause__)})
        raise HTTPException(status_code=500, detail=exc.message) from exc


@router.get("/summary", response_model=SummaryResponse, responses=_ERROR_RESPONSES)
def get_summary(db: Session = Depends(get_db_session)):
    service = PortfolioService(db=db)
    try:
        return service.get_summary()
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except StoreError as exc:
        logger.exception("Summary query failed", extra={"error": str(exc.__cause__)})
        raise HTTPException(status_code=500, detail=exc.message) from exc
