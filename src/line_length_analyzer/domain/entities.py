from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Optional, Union

from line_length_analyzer.domain.constants import DEFAULT_FILE_EXTENSION, DEFAULT_FILE_PREFIX
from line_length_analyzer.domain.errors import ConstructionError, OutOfRangeError
from line_length_analyzer.domain.options import AnalyzerOptions

if TYPE_CHECKING:
    from line_length_analyzer.domain.cancellation import CancellationToken


class Severity(Enum):
    """Severity a diagnostic is reported with."""
    HIDDEN = "hidden"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Location:
    """
    Position of a diagnostic inside a document.

    Lines and columns are 1-based; -1 means unknown.
    """
    path: str = ""
    line: int = -1
    column: int = -1

    def __post_init__(self) -> None:
        if self.line < -1:
            raise OutOfRangeError("line", self.line, -1)
        if self.column < -1:
            raise OutOfRangeError("column", self.column, -1)

    def __str__(self) -> str:
        return f"{self.path}({self.line},{self.column})"


@dataclass(frozen=True)
class Diagnostic:
    """A single reported issue. Equality covers every field, locations included."""
    rule_id: str
    severity: Severity
    message: str
    locations: tuple[Location, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable of locations but store a tuple so the value stays hashable.
        if not isinstance(self.locations, tuple):
            object.__setattr__(self, "locations", tuple(self.locations))

    @property
    def primary_location(self) -> Optional[Location]:
        return self.locations[0] if self.locations else None

    @property
    def path(self) -> str:
        return self.locations[0].path if self.locations else ""

    @property
    def line(self) -> int:
        return self.locations[0].line if self.locations else -1

    @property
    def column(self) -> int:
        return self.locations[0].column if self.locations else -1

    def __str__(self) -> str:
        prefix = f"{self.primary_location}: " if self.locations else ""
        return f"{prefix}{self.severity.value} {self.rule_id}: {self.message}"


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Capability descriptor a rule registers for every rule id it can report."""
    rule_id: str
    title: str
    message_format: str
    category: str
    default_severity: Severity
    enabled_by_default: bool = True
    description: str = ""

    def create(self, *locations: Location, **message_args: Any) -> Diagnostic:
        """Build a diagnostic from this descriptor, formatting the message template."""
        return Diagnostic(
            rule_id=self.rule_id,
            severity=self.default_severity,
            message=self.message_format.format(**message_args),
            locations=tuple(locations),
        )


@dataclass(frozen=True)
class Document:
    """Source text identified by a stable name. Never mutated; fixes produce new documents."""
    name: str
    text: str
    path: str = ""

    def __post_init__(self) -> None:
        if not self.path:
            object.__setattr__(self, "path", self.name)

    def with_text(self, text: str) -> "Document":
        return replace(self, text=text)


@dataclass(frozen=True)
class Project:
    """
    Ordered, named collection of documents sharing one analysis configuration.

    Every change returns a new snapshot so the previous one stays valid for
    before/after comparisons.
    """
    name: str = "TestProject"
    documents: tuple[Document, ...] = ()
    options: AnalyzerOptions = field(default_factory=AnalyzerOptions)

    def __post_init__(self) -> None:
        if not isinstance(self.documents, tuple):
            object.__setattr__(self, "documents", tuple(self.documents))
        names = [d.name for d in self.documents]
        if len(names) != len(set(names)):
            raise ConstructionError(f"Duplicate document names in project {self.name!r}: {names}")

    @classmethod
    def from_sources(
        cls,
        sources: Iterable[str],
        options: Optional[AnalyzerOptions] = None,
        file_prefix: str = DEFAULT_FILE_PREFIX,
        extension: str = DEFAULT_FILE_EXTENSION,
        name: str = "TestProject",
    ) -> "Project":
        """Build a project naming documents Test0.py, Test1.py, ... in source order."""
        documents = tuple(
            Document(name=f"{file_prefix}{index}{extension}", text=text)
            for index, text in enumerate(sources)
        )
        return cls(name=name, documents=documents, options=options or AnalyzerOptions())

    @property
    def document_names(self) -> list[str]:
        return [d.name for d in self.documents]

    def get_document(self, name: str) -> Document:
        for document in self.documents:
            if document.name == name or document.path == name:
                return document
        raise KeyError(name)

    def has_path(self, path: str) -> bool:
        return any(d.path == path for d in self.documents)

    def with_document(self, document: Document) -> "Project":
        """Return a snapshot where the document with the same name is replaced."""
        self.get_document(document.name)
        documents = tuple(document if d.name == document.name else d for d in self.documents)
        return replace(self, documents=documents)

    def with_document_text(self, name: str, text: str) -> "Project":
        return self.with_document(self.get_document(name).with_text(text))

    def with_options(self, options: AnalyzerOptions) -> "Project":
        return replace(self, options=options)


ProjectOrAwaitable = Union[Project, Awaitable[Project]]


@dataclass(frozen=True)
class FixAction:
    """
    A named transformation offered for one diagnostic.

    ``apply`` receives the current project and a cancellation token and returns
    the new project snapshot (or an awaitable resolving to it).
    """
    title: str
    apply: Callable[[Project, "CancellationToken"], ProjectOrAwaitable] = field(compare=False)
    equivalence_key: Optional[str] = None


class TransformationType(Enum):
    """Types of code transformations the fix provider can apply."""
    MOVE_TRAILING_COMMENT = "move_trailing_comment"
    WRAP_CALL_ARGUMENTS = "wrap_call_arguments"


@dataclass(frozen=True)
class TransformationPlan:
    """
    Pure data structure describing a code transformation.

    The fixer gateway interprets the plan and applies the matching LibCST
    transformer.
    """
    transformation_type: TransformationType
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def move_trailing_comment(cls, target_line: int) -> "TransformationPlan":
        """Create plan to move the trailing comment of the statement ending on a line above it."""
        return cls(
            transformation_type=TransformationType.MOVE_TRAILING_COMMENT,
            params={"target_line": target_line},
        )

    @classmethod
    def wrap_call_arguments(cls, target_line: int, indent: str = "    ") -> "TransformationPlan":
        """Create plan to put each argument of the outermost call on a line onto its own line."""
        return cls(
            transformation_type=TransformationType.WRAP_CALL_ARGUMENTS,
            params={"target_line": target_line, "indent": indent},
        )
