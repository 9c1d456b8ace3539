"""Listeners that receive differences from the comparison engine."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .models import DifferenceEntry, DifferenceType, SkippedEntry
from .nodes import Node
from .utils import node_path

logger = logging.getLogger(__name__)


class DifferenceListener(ABC):
    """Receives every difference found while comparing two trees."""

    @abstractmethod
    def difference_found(
        self,
        expected: str,
        actual: str,
        control: Optional[Node],
        test: Optional[Node],
        difference: DifferenceType
    ):
        """
        Called once for each difference.

        Args:
            expected: Text form of the control value ('null' when absent)
            actual: Text form of the test value ('null' when absent)
            control: Control node the values came from
            test: Test node the values came from
            difference: Kind of difference
        """

    @abstractmethod
    def skipped_comparison(self, control: Node, test: Node):
        """Called for a node pair whose kind the engine does not compare."""


class CollectingListener(DifferenceListener):
    """Records every callback so a comparison can be inspected afterwards."""

    def __init__(self):
        self.differences: list[DifferenceEntry] = []
        self.skipped: list[SkippedEntry] = []

    def difference_found(self, expected, actual, control, test, difference):
        self.differences.append(DifferenceEntry(
            difference=difference,
            expected=expected,
            actual=actual,
            control=control,
            test=test,
            control_path=node_path(control),
            test_path=node_path(test)
        ))

    def skipped_comparison(self, control, test):
        self.skipped.append(SkippedEntry(
            control=control,
            test=test,
            control_path=node_path(control),
            test_path=node_path(test)
        ))

    @property
    def identical(self) -> bool:
        """True when no difference at all was reported."""
        return not self.differences

    @property
    def similar(self) -> bool:
        """True when every reported difference was recoverable."""
        return all(entry.recoverable for entry in self.differences)

    @property
    def fatal(self) -> Optional[DifferenceEntry]:
        for entry in self.differences:
            if not entry.recoverable:
                return entry
        return None

    def differences_of(self, difference: DifferenceType) -> list[DifferenceEntry]:
        return [entry for entry in self.differences if entry.difference == difference]


class LoggingListener(DifferenceListener):
    """
    Logs differences, optionally forwarding them to another listener.

    Fatal differences are logged as warnings, recoverable ones as info
    and skipped node pairs at debug level.
    """

    def __init__(
        self,
        delegate: Optional[DifferenceListener] = None,
        log: Optional[logging.Logger] = None
    ):
        self.delegate = delegate
        self.log = log or logger

    def difference_found(self, expected, actual, control, test, difference):
        entry = DifferenceEntry(
            difference=difference,
            expected=expected,
            actual=actual,
            control=control,
            test=test,
            control_path=node_path(control),
            test_path=node_path(test)
        )
        level = logging.INFO if difference.recoverable else logging.WARNING
        self.log.log(level, "[%s] %s", difference.name, entry.message)

        if self.delegate is not None:
            self.delegate.difference_found(expected, actual, control, test, difference)

    def skipped_comparison(self, control, test):
        self.log.debug("Skipped comparison of %s and %s at %s",
                       control, test, node_path(control))

        if self.delegate is not None:
            self.delegate.skipped_comparison(control, test)
