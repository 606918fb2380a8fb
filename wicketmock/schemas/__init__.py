from wicketmock.schemas.schemas import (
    OKResponse, HealthResponse, ErrorResponse,
    FragmentSummary, FragmentList,
    RenderRequest, RenderResponse, CacheClearResponse,
)

__all__ = [
    "OKResponse", "HealthResponse", "ErrorResponse",
    "FragmentSummary", "FragmentList",
    "RenderRequest", "RenderResponse", "CacheClearResponse",
]
