"""
xmldifference - XML Comparison Engine

Compares a control XML tree with a test XML tree node by node and reports
every difference to a listener, classifying each one by type and by
whether the comparison can continue past it.
"""

from .engine import DifferenceEngine, compare, diff
from .models import (
    EngineConfig,
    LogLevel,
    NodeKind,
    DifferenceType,
    DifferenceEntry,
    SkippedEntry,
    DiffReport,
    ErrorResponse,
)
from .nodes import (
    Node,
    Attribute,
    Element,
    Text,
    CDataSection,
    Comment,
    DocumentType,
    ProcessingInstruction,
    EntityReference,
    Document,
)
from .listeners import (
    DifferenceListener,
    CollectingListener,
    LoggingListener,
)
from .builder import build_document, from_dom
from .config import load_config
from .exceptions import (
    XMLDifferenceError,
    ValidationError,
    XMLParseError,
    DocumentSizeError,
    ConfigError,
    ScenarioError,
)
from .runner import (
    ScenarioRunner,
    ScenarioResult,
    GlobalReport,
    run_scenarios,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DifferenceEngine",
    "EngineConfig",
    "LogLevel",
    "compare",
    "diff",
    "load_config",
    # Differences
    "DifferenceType",
    "DifferenceEntry",
    "SkippedEntry",
    "DiffReport",
    "ErrorResponse",
    # Nodes
    "NodeKind",
    "Node",
    "Attribute",
    "Element",
    "Text",
    "CDataSection",
    "Comment",
    "DocumentType",
    "ProcessingInstruction",
    "EntityReference",
    "Document",
    "build_document",
    "from_dom",
    # Listeners
    "DifferenceListener",
    "CollectingListener",
    "LoggingListener",
    # Errors
    "XMLDifferenceError",
    "ValidationError",
    "XMLParseError",
    "DocumentSizeError",
    "ConfigError",
    "ScenarioError",
    # Scenario Runner
    "ScenarioRunner",
    "ScenarioResult",
    "GlobalReport",
    "run_scenarios",
]
