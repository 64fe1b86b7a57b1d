from fastapi import HTTPException

SELLER_QUOTE_NOT_FOUND = "seller-quote-not-found"


class NotFoundError(HTTPException):
    """Raised when a lookup that must return exactly one record returns none."""

    def __init__(self, marker: str = SELLER_QUOTE_NOT_FOUND):
        super().__init__(status_code=404, detail=marker)
        self.marker = marker


class DownstreamError(HTTPException):
    """A downstream service answered with an error status or a GraphQL error list."""

    def __init__(self, service: str, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)
        self.service = service

    def __str__(self) -> str:
        return f"{self.service} error {self.status_code}: {self.detail}"
