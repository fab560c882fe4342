"""Aggregated Pydantic schemas for the API surface."""
from .admin import AdminStats, AdminUserSummary, RoleUpdateRequest
from .auth import PasswordGrantRequest, SessionResponse, SignUpRequest, UserResponse, UserUpdateRequest
from .content import NewsCreateRequest, NewsResponse, OpportunityResponse, ServiceResponse
from .fact_checks import (
    FactCheckAttachment,
    FactCheckCreateRequest,
    FactCheckResponse,
    FactCheckVerdictUpdateRequest,
)
from .functions import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    TokenUsage,
    TranscriptionRequest,
    TranscriptionResponse,
    TranslationRequest,
    TranslationResponse,
)
from .reports import (
    ReportAttachmentIn,
    ReportAttachmentResponse,
    ReportCreateRequest,
    ReportResponse,
    ReportStatusUpdateRequest,
)
from .storage import StoredObjectResponse

__all__ = [
    "AdminStats",
    "AdminUserSummary",
    "RoleUpdateRequest",
    "PasswordGrantRequest",
    "SessionResponse",
    "SignUpRequest",
    "UserResponse",
    "UserUpdateRequest",
    "NewsCreateRequest",
    "NewsResponse",
    "OpportunityResponse",
    "ServiceResponse",
    "FactCheckAttachment",
    "FactCheckCreateRequest",
    "FactCheckResponse",
    "FactCheckVerdictUpdateRequest",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "TokenUsage",
    "TranscriptionRequest",
    "TranscriptionResponse",
    "TranslationRequest",
    "TranslationResponse",
    "ReportAttachmentIn",
    "ReportAttachmentResponse",
    "ReportCreateRequest",
    "ReportResponse",
    "ReportStatusUpdateRequest",
    "StoredObjectResponse",
]
