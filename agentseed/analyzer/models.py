"""Data models for the repository analyzer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

FrameworkCategory = Literal[
    "web", "api", "testing", "build", "orm", "data", "etl", "mlops", "streaming", "other"
]
NamingConvention = Literal["camelCase", "snake_case", "kebab-case", "PascalCase", "mixed"]
SamplePriority = Literal["entry", "config", "source", "test"]


@dataclass(frozen=True)
class LanguageInfo:
    name: str
    file_count: int
    percentage: int


@dataclass(frozen=True)
class FrameworkInfo:
    name: str
    category: FrameworkCategory
    confidence: float  # (0, 1], heuristic score, not a probability


@dataclass(frozen=True)
class CommandInfo:
    name: str
    command: str
    source: str  # e.g. "package.json scripts", "Makefile", "Dagster"


@dataclass(frozen=True)
class DirectoryEntry:
    path: str  # directories end with "/"
    type: Literal["file", "directory"]
    depth: int


@dataclass(frozen=True)
class StructureInfo:
    total_files: int = 0
    total_dirs: int = 0
    tree: tuple[DirectoryEntry, ...] = ()
    entry_points: tuple[str, ...] = ()


@dataclass(frozen=True)
class PatternInfo:
    naming_convention: NamingConvention = "mixed"
    file_organization: str = "flat"  # "feature-based", "layer-based", ...
    has_monorepo: bool = False
    config_files: tuple[str, ...] = ()
    ci_files: tuple[str, ...] = ()


@dataclass(frozen=True)
class SampledFile:
    path: str
    content: str
    priority: SamplePriority
    size_bytes: int


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregate produced once per analyzed root."""

    languages: tuple[LanguageInfo, ...] = ()
    frameworks: tuple[FrameworkInfo, ...] = ()
    commands: tuple[CommandInfo, ...] = ()
    structure: StructureInfo = field(default_factory=StructureInfo)
    patterns: PatternInfo = field(default_factory=PatternInfo)
    sampled_files: tuple[SampledFile, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
