"""
Data structures for the progressive artifact renderer.

Holds the complexity profile produced by template analysis, the render
options, the split plans chosen by the decision engine and the artifact
records handed back to callers.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union


# Fraction of ``artifact_max_size`` a single artifact may use before the
# renderer prefers splitting.
SPLIT_SIZE_RATIO = 0.8

ARTIFACT_TYPES = {
    "html": "text/html",
    "markdown": "text/markdown",
    "code": "application/vnd.ant.code",
}

ARTIFACT_TITLE = "Visualização Progressiva"

# Division point identifiers, in the order they are reported
DIVISION_HEADER = "header"
DIVISION_MAIN = "main"
DIVISION_FOOTER = "footer"
DIVISION_ORDER = (DIVISION_HEADER, DIVISION_MAIN, DIVISION_FOOTER)


class ArtifactError(Exception):
    """Base exception for artifact rendering."""


class ArtifactRenderError(ArtifactError):
    """Raised when a chunk cannot be rendered into markup."""


class InvalidRenderOptionsError(ArtifactError, ValueError):
    """Raised when render options are out of range."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message)
        self.field_name = field_name


@dataclass(frozen=True)
class TemplateComplexityProfile:
    """
    Structural snapshot of one template.

    Counts come from tolerant pattern matching, so malformed markup simply
    yields lower counts.
    """
    component_count: int = 0
    image_count: int = 0
    table_count: int = 0
    form_count: int = 0
    script_count: int = 0
    has_header: bool = False
    has_footer: bool = False
    has_main_content: bool = False
    complexity_score: int = 0
    division_points: Tuple[str, ...] = ()
    size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["division_points"] = list(self.division_points)
        return data


# camelCase spellings accepted from JSON callers
_CAMEL_CASE_KEYS = {
    "priorityLevels": "priority_levels",
    "skeletonLoading": "skeleton_loading",
    "feedbackEnabled": "feedback_enabled",
    "artifactMaxSize": "artifact_max_size",
    "splitThreshold": "split_threshold",
    "useLogicalDivision": "use_logical_division",
    "artifactType": "artifact_type",
}


@dataclass(frozen=True)
class RenderOptions:
    """
    Options for progressive artifact rendering.
    """
    priority_levels: int = 5
    skeleton_loading: bool = True
    feedback_enabled: bool = True
    artifact_max_size: int = 500000  # characters
    split_threshold: int = 100  # div count above which splitting is preferred
    use_logical_division: bool = True
    artifact_type: str = ARTIFACT_TYPES["html"]

    @property
    def split_size_limit(self) -> float:
        """Size above which a template is split regardless of component count."""
        return self.artifact_max_size * SPLIT_SIZE_RATIO

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RenderOptions":
        """Build options from a mapping, ignoring unknown keys.

        Raises:
            InvalidRenderOptionsError: If a value is out of range or malformed
        """
        return cls().merged(data)

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> "RenderOptions":
        """Return a copy with ``overrides`` applied.

        ``None`` values are ignored so callers can pass partially filled
        option sets straight through.
        """
        if not overrides:
            return self

        known = {f.name for f in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known or value is None:
                continue
            changes[name] = _coerce_option(name, getattr(self, name), value)

        result = replace(self, **changes)
        result.validate()
        return result

    def validate(self) -> None:
        if self.priority_levels < 1:
            raise InvalidRenderOptionsError(
                "priority_levels must be at least 1", "priority_levels"
            )
        if self.artifact_max_size <= 0:
            raise InvalidRenderOptionsError(
                "artifact_max_size must be positive", "artifact_max_size"
            )
        if self.split_threshold < 0:
            raise InvalidRenderOptionsError(
                "split_threshold must not be negative", "split_threshold"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce_option(name: str, current: Any, value: Any) -> Any:
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)
    if isinstance(current, int):
        if isinstance(value, bool):
            raise InvalidRenderOptionsError(f"{name} must be an integer", name)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise InvalidRenderOptionsError(f"{name} must be an integer", name) from None
    return str(value)


@dataclass(frozen=True)
class Artifact:
    """
    A self-contained output document.
    """
    type: str
    title: str
    content: str

    @property
    def size(self) -> int:
        return len(self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "title": self.title, "content": self.content}


class SplitStrategy(str, Enum):
    """How a template is divided into artifacts."""

    NONE = "none"
    LOGICAL = "logical"
    AUTOMATIC = "automatic"


@dataclass(frozen=True)
class NoSplit:
    """Render the template as a single artifact."""

    strategy: SplitStrategy = field(default=SplitStrategy.NONE, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"strategy": self.strategy.value}


@dataclass(frozen=True)
class LogicalSplit:
    """Split along header/main/footer section boundaries."""

    points: Tuple[str, ...]
    strategy: SplitStrategy = field(default=SplitStrategy.LOGICAL, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"strategy": self.strategy.value, "points": list(self.points)}


@dataclass(frozen=True)
class AutomaticSplit:
    """Split by components, or by byte offsets when components are scarce."""

    target_count: int
    strategy: SplitStrategy = field(default=SplitStrategy.AUTOMATIC, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"strategy": self.strategy.value, "target_count": self.target_count}


SplitPlan = Union[NoSplit, LogicalSplit, AutomaticSplit]
