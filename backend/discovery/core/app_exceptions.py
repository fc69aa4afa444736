"""Application-specific exceptions for consistent error handling."""

from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Application error with standardized error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize application error."""
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


def document_not_found(document_id: str) -> AppError:
    return AppError(
        status_code=status.HTTP_404_NOT_FOUND,
        code="DOCUMENT_NOT_FOUND",
        message=f"Document {document_id} not found",
        details={"id": document_id},
    )


def facet_not_found(field: str) -> AppError:
    return AppError(
        status_code=status.HTTP_404_NOT_FOUND,
        code="FACET_NOT_FOUND",
        message=f"Facet {field} is not configured",
        details={"field": field},
    )


def search_unavailable(reason: str) -> AppError:
    return AppError(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        code="SEARCH_UNAVAILABLE",
        message="The search service is unavailable",
        details={"reason": reason},
    )


def invalid_sort(sort: str, valid: list[str]) -> AppError:
    return AppError(
        status_code=status.HTTP_400_BAD_REQUEST,
        code="INVALID_SORT",
        message=f"Invalid sort. Must be one of: {', '.join(valid)}",
        details={"sort": sort, "valid": valid},
    )


def invalid_search_request(reason: str) -> AppError:
    """The search engine rejected the query (e.g. paging past the result window)."""
    return AppError(
        status_code=status.HTTP_400_BAD_REQUEST,
        code="INVALID_SEARCH_REQUEST",
        message="The search request was rejected",
        details={"reason": reason},
    )
