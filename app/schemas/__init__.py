from .common import ApiResponse, ErrorDetail, HealthCheckResponse, ResponseMeta
from .chat import ChatMessage, ChatRequest
from .documents import DocumentStatus
from .tariffs import (
    HotelSearchItem,
    HotelSearchResponse,
    TariffDetail,
    TariffDetailResponse,
)

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "HealthCheckResponse",
    "ResponseMeta",
    "ChatMessage",
    "ChatRequest",
    "DocumentStatus",
    "HotelSearchItem",
    "HotelSearchResponse",
    "TariffDetail",
    "TariffDetailResponse",
]
