"""
Service models for abstraction requests and results.
"""

import uuid
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator

from ...shared.models.base import BaseModel
from ...shared.models.ontouml import OntoumlElement
from ...shared.models.project import Project


class AbstractionRule(str, Enum):
    """Bulk abstraction rules."""
    PARTHOOD = "parthood"
    HIERARCHY = "hierarchy"
    ASPECTS = "aspects"


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class AbstractionOptions(BaseModel):
    """Options of an abstraction request."""

    active_diagram_id: Optional[str] = Field(default=None, description="Diagram to abstract")
    active_element_id: Optional[str] = Field(
        default=None, description="Element (or view) to abstract from; overrides the bulk rule"
    )
    abstraction_rule: Optional[AbstractionRule] = Field(
        default=None, description="Bulk rule, defaults to the configured one"
    )

    @field_validator('abstraction_rule', mode='before')
    @classmethod
    def normalize_rule(cls, v):
        """Accept rule names in any case."""
        return v.strip().lower() if isinstance(v, str) else v


class AbstractionIssue(BaseModel):
    """Non-fatal problem found while abstracting, e.g. a class no rule can fold."""

    id: str = Field(default_factory=lambda: f"issue_{uuid.uuid4().hex[:12]}")
    code: str = Field(default="not_abstractable_class")
    title: str = Field(..., description="Human-readable summary")
    description: Optional[str] = Field(default=None)
    severity: IssueSeverity = Field(default=IssueSeverity.WARNING)
    data: Dict[str, Any] = Field(default_factory=dict, description="Holds the offending element under 'source'")

    @classmethod
    def for_element(cls, element: OntoumlElement, title: str,
                    severity: IssueSeverity = IssueSeverity.WARNING,
                    description: Optional[str] = None) -> "AbstractionIssue":
        return cls(
            title=title,
            severity=severity,
            description=description,
            data={"source": element.to_json_dict()},
        )

    @property
    def source_id(self) -> Optional[str]:
        return self.data.get("source", {}).get("id")


class AbstractionResult(BaseModel):
    """The project with the abstracted package and diagram appended, plus issues."""

    result: Project
    issues: List[AbstractionIssue] = Field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def get_summary(self) -> Dict[str, Any]:
        diagram = self.result.diagrams[-1] if self.result.diagrams else None
        return {
            'project_id': self.result.id,
            'diagram_id': diagram.id if diagram else None,
            'diagram_name': diagram.name if diagram else None,
            'issue_count': len(self.issues),
        }
