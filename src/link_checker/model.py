# src/link_checker/model.py
import os
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from link_checker.services.generate_default_user_agent_service import generate_default_user_agent


def default_parallelism() -> int:
    return (os.cpu_count() or 1) * 4


class HtmlSettings(BaseModel):
    pattern: str = Field(default="**/*.html")
    tags: Dict[str, List[str]] = Field(default_factory=lambda: {
        "a": ["href"],
        "img": ["src", "data-src"],
        "link": ["href"],
        "script": ["src"],
    })

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, v):
        # A single attribute name is a list of one.
        if not isinstance(v, dict):
            return v
        return {tag: [attrs] if isinstance(attrs, str) else list(attrs) for tag, attrs in v.items()}


class LinkCheckSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    html: HtmlSettings = Field(default_factory=HtmlSettings)
    ignore: List[str] = Field(default_factory=list)
    timeout: float = Field(default=15.0, gt=0, description="Per-request timeout in seconds.")
    user_agent: str = Field(default_factory=generate_default_user_agent, alias="userAgent")
    parallelism: int = Field(default_factory=default_parallelism, ge=1)
    progress: bool = Field(default=False, description="Show a progress bar while probing remote links.")


class ValidationOutcome(BaseModel):
    """Result of validating one distinct reference."""
    reference: str
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, reference: str) -> "ValidationOutcome":
        return cls(reference=reference)

    @classmethod
    def broken(cls, reference: str, reason: str) -> "ValidationOutcome":
        return cls(reference=reference, error=reason)


class LinkReport(BaseModel):
    """
    Broken references grouped by citing document.
    Only documents with at least one broken reference are present.
    """
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def render(self) -> Optional[str]:
        if not self.errors:
            return None
        sections = []
        for filename in sorted(self.errors):
            lines = "\n".join(f"  {line}" for line in sorted(self.errors[filename]))
            sections.append(f"{filename}:\n{lines}")
        return "Broken links found:\n\n" + "\n\n".join(sections)


