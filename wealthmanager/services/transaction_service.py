from __future__ import annotations

import logging
import math

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wealthmanager.models.schemas import TransactionResponse
from wealthmanager.models.tables import Transaction
from wealthmanager.services.errors import BadRequestError, StoreError
from wealthmanager.storage.repository import TransactionRepository

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = TransactionRepository(db=db)

    @staticmethod
    def _to_response(row: Transaction) -> TransactionResponse:
        return TransactionResponse(
            id=row.id,
            title=row.title,
            amount=row.amount,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def list_transactions(self) -> list[TransactionResponse]:
        try:
            rows = self.repo.list_all()
        except SQLAlchemyError as exc:
            raise StoreError("Server error fetching transactions.") from exc
        return [self._to_response(row) for row in rows]

    def create_transaction(self, title: str | None, amount: float | None) -> TransactionResponse:
        if title is None or not str(title).strip():
            raise BadRequestError("Transaction title is required.")
        if amount is None or isinstance(amount, bool):
            raise BadRequestError("Transaction amount is required.")
        try:
            clean_amount = float(amount)
        except (TypeError, ValueError) as exc:
            raise BadRequestError("Transaction amount must be a number.") from exc
        if math.isnan(clean_amount) or math.isinf(clean_amount):
            raise BadRequestError("Transaction amount must be a number.")

        try:
            row = self.repo.add(title=title, amount=clean_amount)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError("Server error creating transaction.") from exc

        logger.info("Transaction created", extra={"transaction_id": row.id})
        return self._to_response(row)
