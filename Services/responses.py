# Services/responses.py
"""Uniform success and error envelopes shared by every endpoint."""
from typing import Any, List, Optional, Union


def success(
    message: str,
    data: Any = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    total_pages: Optional[int] = None,
    total_items: Optional[int] = None,
) -> dict:
    envelope = {
        "message": message,
        "page": page,
        "limit": limit,
        "totalPages": total_pages,
        "totalItems": total_items,
        "data": data,
    }
    # Unset keys are left out of the body, not sent as null
    return {key: value for key, value in envelope.items() if value is not None}


def error(message: str, errors: Optional[Union[str, List[str]]] = None) -> dict:
    if errors is None:
        return {"message": message}
    return {"message": message, "errors": errors}
