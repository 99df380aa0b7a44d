"""
Generation API schemas.

This module contains Pydantic schemas for the generation and
provider health endpoints.
"""

from pydantic import BaseModel
from typing import List, Optional

from ...core.models.llm import ProviderSpec


class GenerateResponseSchema(BaseModel):
    """Schema for a successful generation response."""

    ascii: str


class ProviderStatusSchema(BaseModel):
    """Public view of one provider; never carries the credential."""

    name: str
    models: List[str]
    base_url: Optional[str] = None
    timeout: Optional[float] = None

    @classmethod
    def from_spec(cls, spec: ProviderSpec) -> 'ProviderStatusSchema':
        return cls(
            name=spec.name,
            models=list(spec.model_candidates),
            base_url=spec.base_url,
            timeout=spec.timeout
        )
