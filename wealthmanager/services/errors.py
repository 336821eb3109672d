from __future__ import annotations


class PortfolioError(RuntimeError):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(PortfolioError):
    status_code = 404


class BadRequestError(PortfolioError):
    status_code = 400


class StoreError(PortfolioError):
    status_code = 500
