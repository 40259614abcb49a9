from datetime import datetime, timezone
from typing import Any, Optional, Dict
from uuid import uuid4

from fastapi import HTTPException, Request

from app.core.exceptions import AppError
from app.schemas.common import ApiResponse, ResponseMeta, ErrorDetail


def _request_id(request: Optional[Request]) -> str:
    if request is not None and hasattr(request.state, "request_id"):
        return request.state.request_id
    return str(uuid4())


def create_api_response(
    data: Any,
    message: str = "Operation successful",
    status: bool = True,
    request: Optional[Request] = None,
    api_version: str = "v1"
) -> Dict[str, Any]:
    """Create a standardized API response as a dictionary."""
    meta = ResponseMeta(
        timestamp=datetime.now(timezone.utc),
        request_id=_request_id(request),
        api_version=api_version
    )

    if isinstance(data, dict):
        data_dict = data
    elif hasattr(data, "model_dump"):
        data_dict = data.model_dump(by_alias=True)
    elif isinstance(data, list):
        data_dict = {
            "items": [item.model_dump(by_alias=True) if hasattr(item, "model_dump") else item for item in data]
        }
    elif data is None:
        data_dict = {}
    else:
        data_dict = {"value": data}

    response = ApiResponse(status=status, message=message, data=data_dict, meta=meta)
    return response.model_dump(mode="json")


def create_error_detail(
    title: str,
    status: int,
    detail: str,
    request: Optional[Request] = None,
    instance: Optional[str] = None
) -> ErrorDetail:
    """Create a standardized error detail (RFC 7807)."""
    return ErrorDetail(
        title=title,
        status=status,
        detail=detail,
        instance=instance or (request.url.path if request else None),
        request_id=_request_id(request),
        timestamp=datetime.now(timezone.utc)
    )


def http_error(
    status: int,
    title: str,
    detail: str,
    request: Optional[Request] = None,
) -> HTTPException:
    """Build an HTTPException whose detail is an RFC 7807 payload."""
    error_detail = create_error_detail(title=title, status=status, detail=detail, request=request)
    return HTTPException(status_code=status, detail=error_detail.model_dump(mode="json"))


def http_error_from(error: AppError, request: Optional[Request] = None) -> HTTPException:
    """Translate an application error into its HTTPException."""
    return http_error(error.status_code, error.title, error.message, request=request)
