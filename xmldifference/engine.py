"""Main comparison engine for xmldifference."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    EngineConfig,
    DiffReport,
    ExecutionInfo,
    Summary,
    ErrorResponse,
)
from .nodes import Node
from .builder import build_document
from .differ import NodeDiffer
from .listeners import DifferenceListener, CollectingListener
from .exceptions import (
    ValidationError,
    XMLParseError,
    DocumentSizeError,
)
from .utils import get_document_size_mb

logger = logging.getLogger(__name__)


class DifferenceEngine:
    """
    Compares a control XML tree with a test XML tree.

    `compare` is the low level entry point: it walks both trees and sends
    every difference to a listener. `diff` wraps it into a pipeline:

    1. Validation: check input types and document sizes
    2. Building: parse XML text into node trees
    3. Comparison: walk the trees with a collecting listener
    4. Reporting: summarise the collected differences
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def compare(
        self,
        control: Optional[Node],
        test: Optional[Node],
        listener: DifferenceListener
    ) -> None:
        """
        Compare two node trees, reporting every difference to the listener.

        Either side may be None. Comparison stops after the first fatal
        difference; mismatches are never raised. Exceptions raised by the
        listener propagate to the caller.

        Args:
            control: The expected tree
            test: The tree under evaluation
            listener: Receives differences and skipped comparisons
        """
        differ = NodeDiffer(listener, ignore_whitespace=self.config.ignore_whitespace)
        logger.debug("Comparing %s with %s", control, test)
        differ.diff(control, test)
        logger.debug("Compared %d node pairs, %d differences",
                     differ.nodes_compared, differ.differences_found)

    def diff(self, control: Any, test: Any) -> DiffReport | ErrorResponse:
        """
        Compare two documents and build a report.

        Args:
            control: Expected document as XML text, bytes, a node tree or None
            test: Document under evaluation, same accepted types

        Returns:
            DiffReport on success, ErrorResponse on validation/parsing errors
        """
        start_time = time.time()

        try:
            self._validate_inputs(control, test)

            control_root = self._build(control, "control")
            test_root = self._build(test, "test")

            listener = CollectingListener()
            differ = NodeDiffer(listener, ignore_whitespace=self.config.ignore_whitespace)
            differ.diff(control_root, test_root)

            duration_ms = int((time.time() - start_time) * 1000)

            recoverable_count = sum(1 for d in listener.differences if d.recoverable)
            summary = Summary(
                differences_found=len(listener.differences),
                recoverable_count=recoverable_count,
                fatal_count=len(listener.differences) - recoverable_count,
            )
            if self.config.collect_statistics:
                summary.nodes_compared = differ.nodes_compared
                summary.skipped_count = len(listener.skipped)

            report = DiffReport(
                identical=listener.identical,
                similar=listener.similar,
                execution=ExecutionInfo(
                    duration_ms=duration_ms,
                    timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                    engine_version=self.VERSION
                ),
                summary=summary,
                differences=listener.differences,
                skipped=listener.skipped
            )

            logger.info("Diff finished: identical=%s similar=%s differences=%d",
                        report.identical, report.similar, summary.differences_found)
            return report

        except ValidationError as e:
            return self._create_error_response(
                "VALIDATION_ERROR",
                e.message,
                e.details
            )
        except DocumentSizeError as e:
            return self._create_error_response(
                "DOCUMENT_SIZE_ERROR",
                str(e),
                {"size_mb": e.size_mb, "limit_mb": e.limit_mb}
            )
        except XMLParseError as e:
            return self._create_error_response(
                "PARSE_ERROR",
                e.message,
                {"line": e.line, "column": e.column, "source": e.source}
            )
        except Exception as e:
            logger.exception("Diff failed")
            return self._create_error_response(
                "PROCESSING_ERROR",
                str(e),
                {"type": type(e).__name__}
            )

    def _validate_inputs(self, control: Any, test: Any):
        """Validate input parameters."""
        for name, value in (("control", control), ("test", test)):
            if value is None or isinstance(value, Node):
                continue

            if not isinstance(value, (str, bytes)):
                raise ValidationError(
                    f"{name} must be XML text, bytes or a node",
                    {"type": type(value).__name__}
                )

            size = get_document_size_mb(value)
            if size > self.config.max_document_size_mb:
                raise DocumentSizeError(size, self.config.max_document_size_mb)

    def _build(self, value: Any, name: str) -> Optional[Node]:
        if value is None or isinstance(value, Node):
            return value
        return build_document(
            value,
            ignore_whitespace=self.config.ignore_whitespace,
            source_name=name
        )

    def _create_error_response(
        self,
        code: str,
        message: str,
        details: dict
    ) -> ErrorResponse:
        """Create an error response."""
        logger.warning("Diff failed with %s: %s", code, message)
        return ErrorResponse(
            success=False,
            error={
                "code": code,
                "message": message,
                "details": details
            }
        )


def compare(
    control: Optional[Node],
    test: Optional[Node],
    listener: DifferenceListener,
    config: Optional[EngineConfig] = None
) -> None:
    """
    Convenience function to compare two node trees.

    Args:
        control: The expected tree
        test: The tree under evaluation
        listener: Receives differences and skipped comparisons
        config: Optional engine configuration
    """
    DifferenceEngine(config).compare(control, test, listener)


def diff(
    control: Any,
    test: Any,
    config: Optional[EngineConfig] = None
) -> DiffReport | ErrorResponse:
    """
    Convenience function to compare two XML documents.

    Args:
        control: Expected document as XML text, bytes, a node tree or None
        test: Document under evaluation
        config: Optional engine configuration

    Returns:
        DiffReport on success, ErrorResponse on errors
    """
    return DifferenceEngine(config).diff(control, test)
