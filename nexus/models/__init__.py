"""SQLAlchemy ORM models for Nexus profiles.

All models are exported from this module for convenient imports:
    from nexus.models import AccountProfile, CandidateProfile, Company, ...

Models are organized by domain:
- account_profile.py: AccountProfile (identity provider's cached user row)
- candidate_profile.py: CandidateProfile (personal + professional data)
- company.py: Company (recruiter company profile)
- stored_object.py: StoredObject (uploaded binaries)
"""

from nexus.models.account_profile import (
    ROLE_CANDIDATE,
    ROLE_RECRUITER,
    AccountProfile,
)
from nexus.models.base import Base, TimestampMixin
from nexus.models.candidate_profile import CandidateProfile
from nexus.models.company import Company
from nexus.models.stored_object import StoredObject

__all__ = [
    "ROLE_CANDIDATE",
    "ROLE_RECRUITER",
    "AccountProfile",
    "Base",
    "CandidateProfile",
    "Company",
    "StoredObject",
    "TimestampMixin",
]
