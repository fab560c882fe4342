"""Convenience exports for service layer."""
from .admin_service import list_users, load_admin_stats, update_user_role
from .assistant_service import chat, transcribe, translate
from .auth_service import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_current_user,
    get_optional_user,
    sign_up,
    token_lifetime_seconds,
    update_user_metadata,
)
from .content_service import (
    create_news,
    delete_news,
    get_news,
    get_opportunity,
    get_service,
    list_news,
    list_opportunities,
    list_services,
)
from .fact_check_service import create_fact_check, list_fact_checks, update_verdict
from .openai_client import (
    OpenAIConfigurationError,
    OpenAIRequestError,
    get_openai_client,
    set_openai_client,
)
from .report_service import add_attachments, create_report, get_report, list_reports, update_report_status
from .storage_service import (
    InvalidObjectPathError,
    StorageConfigurationError,
    StorageObjectExistsError,
    StorageUploadError,
    UnknownBucketError,
    build_public_url,
    upload_object,
)

__all__ = [
    "list_users",
    "load_admin_stats",
    "update_user_role",
    "chat",
    "transcribe",
    "translate",
    "authenticate_user",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "sign_up",
    "token_lifetime_seconds",
    "update_user_metadata",
    "create_news",
    "delete_news",
    "get_news",
    "get_opportunity",
    "get_service",
    "list_news",
    "list_opportunities",
    "list_services",
    "create_fact_check",
    "list_fact_checks",
    "update_verdict",
    "OpenAIConfigurationError",
    "OpenAIRequestError",
    "get_openai_client",
    "set_openai_client",
    "add_attachments",
    "create_report",
    "get_report",
    "list_reports",
    "update_report_status",
    "InvalidObjectPathError",
    "StorageConfigurationError",
    "StorageObjectExistsError",
    "StorageUploadError",
    "UnknownBucketError",
    "build_public_url",
    "upload_object",
]
