"""Pydantic validation schemas."""
from pydantic import BaseModel, Field, field_validator
from typing import List, Union

from cspguard.policy.domains import parse_patterns


class PolicySpec(BaseModel):
    """One configured fetch directive."""
    id: str = Field(..., min_length=1)
    reportOnly: bool = False
    hosts: List[str] = []
    schemes: List[str] = []
    selfAllowed: bool = False
    inlineAllowed: bool = False
    evalAllowed: bool = False
    nonces: List[str] = []
    hashes: List[str] = []
    dynamicAllowed: bool = False
    eventHandlersAllowed: bool = False

    @field_validator('id')
    @classmethod
    def validate_id(cls, v):
        v = v.strip().lower()
        if not v or ' ' in v or ';' in v:
            raise ValueError('policy id must be a single directive name')
        return v

    @field_validator('schemes')
    @classmethod
    def strip_scheme_colon(cls, v):
        return [s.rstrip(':') for s in v]


class CspSettings(BaseModel):
    """The ``csp`` configuration section."""
    enabled: bool = False
    excludeRestApi: bool = False
    excludeAdminToken: bool = False
    blockThirdPartyDomains: bool = False
    blockedDomains: List[str] = []
    flags: List[str] = []
    policies: List[PolicySpec] = []

    @field_validator('blockedDomains', mode='before')
    @classmethod
    def split_blocked_domains(cls, v: Union[str, List[str], None]):
        if v is None:
            return []
        if isinstance(v, str):
            return parse_patterns(v)
        if isinstance(v, list):
            return [str(p).strip() for p in v if str(p).strip()]
        raise ValueError('blockedDomains must be a newline-delimited string or a list')
