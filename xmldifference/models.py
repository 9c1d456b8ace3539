"""Data models for the xmldifference engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional

from .exceptions import ConfigError


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class NodeKind(Enum):
    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    TEXT = "text"
    CDATA_SECTION = "cdata_section"
    ENTITY_REFERENCE = "entity_reference"
    ENTITY = "entity"
    PROCESSING_INSTRUCTION = "processing_instruction"
    COMMENT = "comment"
    DOCUMENT = "document"
    DOCUMENT_TYPE = "document_type"
    DOCUMENT_FRAGMENT = "document_fragment"
    NOTATION = "notation"


class DifferenceType(Enum):
    """
    Closed set of discrepancies the engine can report.

    Each member carries a numeric id, a human readable description and
    whether the comparison may continue after it has been reported.
    """

    ATTR_VALUE_EXPLICITLY_SPECIFIED = (1, "attribute value explicitly specified", True)
    ATTR_NAME_NOT_FOUND = (2, "attribute name", False)
    ATTR_VALUE = (3, "attribute value", False)
    ATTR_SEQUENCE = (4, "sequence of attributes", True)
    CDATA_VALUE = (5, "CDATA section value", False)
    COMMENT_VALUE = (6, "comment value", False)
    DOCTYPE_NAME = (7, "doctype name", False)
    DOCTYPE_PUBLIC_ID = (8, "doctype public identifier", False)
    DOCTYPE_SYSTEM_ID = (9, "doctype system identifier", True)
    ELEMENT_TAG_NAME = (10, "element tag name", False)
    ELEMENT_NUM_ATTRIBUTES = (11, "number of element attributes", False)
    PROCESSING_INSTRUCTION_TARGET = (12, "processing instruction target", False)
    PROCESSING_INSTRUCTION_DATA = (13, "processing instruction data", False)
    TEXT_VALUE = (14, "text value", False)
    NAMESPACE_PREFIX = (15, "namespace prefix", True)
    NAMESPACE_URI = (16, "namespace URI", False)
    NODE_TYPE = (17, "node type", False)
    HAS_CHILD_NODES = (18, "presence of child nodes to be", False)
    CHILD_NODELIST_LENGTH = (19, "number of child nodes", False)
    CHILD_NODELIST_SEQUENCE = (20, "sequence of child nodes", True)

    def __init__(self, id_: int, description: str, recoverable: bool):
        self.id = id_
        self.description = description
        self.recoverable = recoverable

    def __str__(self) -> str:
        kind = "recoverable" if self.recoverable else "fatal"
        return f"Difference (#{self.id}) {self.description} [{kind}]"


@dataclass
class EngineConfig:
    """Configuration for the comparison engine."""
    ignore_whitespace: bool = False
    log_level: LogLevel = LogLevel.INFO
    max_document_size_mb: float = 50
    collect_statistics: bool = True

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> EngineConfig:
        """Build a config from a mapping, rejecting unknown keys and bad values."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"expected a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigError("unknown option", key)

        kwargs: dict[str, Any] = {}
        for key in ("ignore_whitespace", "collect_statistics"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ConfigError("must be true or false", key)
                kwargs[key] = data[key]

        if "max_document_size_mb" in data:
            value = data["max_document_size_mb"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError("must be a positive number", "max_document_size_mb")
            kwargs["max_document_size_mb"] = value

        if "log_level" in data:
            try:
                kwargs["log_level"] = LogLevel(str(data["log_level"]).upper())
            except ValueError:
                raise ConfigError(
                    f"must be one of {[level.value for level in LogLevel]}", "log_level"
                )

        return cls(**kwargs)


@dataclass
class DifferenceEntry:
    """A single difference delivered to a listener."""
    difference: DifferenceType
    expected: str
    actual: str
    control: Any
    test: Any
    control_path: str = ""
    test_path: str = ""

    @property
    def recoverable(self) -> bool:
        return self.difference.recoverable

    @property
    def message(self) -> str:
        return (
            f"Expected {self.difference.description} '{self.expected}' "
            f"but was '{self.actual}' - comparing {self.control} at "
            f"{self.control_path} to {self.test} at {self.test_path}"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.difference.id,
            "type": self.difference.name,
            "description": self.difference.description,
            "recoverable": self.difference.recoverable,
            "expected": self.expected,
            "actual": self.actual,
            "control_path": self.control_path,
            "test_path": self.test_path,
            "message": self.message,
        }


@dataclass
class SkippedEntry:
    """A node pair whose kind the engine does not compare."""
    control: Any
    test: Any
    control_path: str = ""
    test_path: str = ""

    def to_dict(self) -> dict:
        return {
            "control": str(self.control),
            "test": str(self.test),
            "control_path": self.control_path,
            "test_path": self.test_path,
        }


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class Summary:
    """Summary statistics of a comparison."""
    nodes_compared: int = 0
    differences_found: int = 0
    recoverable_count: int = 0
    fatal_count: int = 0
    skipped_count: int = 0

    def to_dict(self) -> dict:
        return {
            "nodes_compared": self.nodes_compared,
            "differences_found": self.differences_found,
            "recoverable_count": self.recoverable_count,
            "fatal_count": self.fatal_count,
            "skipped_count": self.skipped_count,
        }


@dataclass
class DiffReport:
    """Complete comparison report."""
    identical: bool
    similar: bool
    execution: ExecutionInfo
    summary: Summary
    differences: list[DifferenceEntry] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "identical": self.identical,
            "similar": self.similar,
            "execution": self.execution.to_dict(),
            "summary": self.summary.to_dict(),
            "differences": [d.to_dict() for d in self.differences],
            "skipped": [s.to_dict() for s in self.skipped],
        }


@dataclass
class ErrorResponse:
    """Error response structure."""
    success: bool = False
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result
