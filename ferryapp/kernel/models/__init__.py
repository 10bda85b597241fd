"""
Kernel Data Models

SQLAlchemy models for credentials and the domain entities they pair with.
"""

from ferryapp.kernel.models.base import Base, TimestampMixin
from ferryapp.kernel.models.credential import AccountRole, Credential
from ferryapp.kernel.models.directory import Company, Employee

__all__ = [
    "Base",
    "TimestampMixin",
    "AccountRole",
    "Credential",
    "Company",
    "Employee",
]
