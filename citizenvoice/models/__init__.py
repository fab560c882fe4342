"""Convenience exports for ORM models."""
from .content import News, Opportunity, Service
from .fact_check import FactCheck
from .report import Report, ReportAttachment
from .user import User

__all__ = [
    "FactCheck",
    "News",
    "Opportunity",
    "Report",
    "ReportAttachment",
    "Service",
    "User",
]
