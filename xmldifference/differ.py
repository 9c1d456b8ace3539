"""Node-by-node walk that reports differences between two XML trees."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .models import DifferenceType, NodeKind
from .nodes import (
    Node,
    Attribute,
    Element,
    CharacterData,
    DocumentType,
    ProcessingInstruction,
)
from .comparators import values_equal
from .utils import as_text

logger = logging.getLogger(__name__)


class NodeDiffer:
    """
    Performs one depth-first comparison of a control tree against a test tree.

    Handles:
    - Node type and namespace checks for every node pair
    - Element tag names and attributes (presence, value, sequence)
    - Character data, doctype and processing instruction payloads
    - Order-insensitive matching of child nodes

    Every difference goes to the listener. Once a fatal (non-recoverable)
    difference has been delivered the differ is aborted: no further
    callbacks happen and every pending call returns at its next check.
    A differ is used for a single comparison and then discarded.
    """

    NULL_NODE = "null"
    NOT_NULL_NODE = "not null"

    def __init__(self, listener, ignore_whitespace: bool = False):
        self.listener = listener
        self.ignore_whitespace = ignore_whitespace

        self.nodes_compared = 0
        self.differences_found = 0
        self.skipped_count = 0
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def diff(self, control: Optional[Node], test: Optional[Node]):
        """
        Compare two (possibly absent) root nodes.

        Args:
            control: The expected tree
            test: The tree under evaluation
        """
        self._compare(
            self._null_or_not_null(control),
            self._null_or_not_null(test),
            control,
            test,
            DifferenceType.NODE_TYPE
        )
        # An absent test node already produced a fatal NODE_TYPE difference
        if control is not None and test is not None:
            self.compare_node(control, test)

        if self._aborted:
            logger.info("Comparison stopped at the first fatal difference")

    def _null_or_not_null(self, node: Optional[Node]) -> str:
        return self.NULL_NODE if node is None else self.NOT_NULL_NODE

    def compare_node(self, control: Node, test: Node):
        """Compare two nodes, their kind specific payload and then their children."""
        if self._aborted:
            return

        self.nodes_compared += 1
        self._compare_node_basics(control, test)
        # A fatal kind or namespace mismatch leaves the pair incomparable
        if self._aborted:
            return

        kind = control.kind
        if kind == NodeKind.ELEMENT:
            self._compare_element(control, test)
        elif kind == NodeKind.CDATA_SECTION:
            self._compare_character_data(control, test, DifferenceType.CDATA_VALUE)
        elif kind == NodeKind.COMMENT:
            self._compare_character_data(control, test, DifferenceType.COMMENT_VALUE)
        elif kind == NodeKind.DOCUMENT_TYPE:
            self._compare_document_type(control, test)
        elif kind == NodeKind.PROCESSING_INSTRUCTION:
            self._compare_processing_instruction(control, test)
        elif kind == NodeKind.TEXT:
            self._compare_character_data(control, test, DifferenceType.TEXT_VALUE)
        else:
            self._skip(control, test)

        if self._aborted:
            return
        self._compare_node_children(control, test)

    def _compare_node_basics(self, control: Node, test: Node):
        """Compare node kind and namespace: whether the nodes are comparable at all."""
        self._compare(control.kind, test.kind, control, test,
                      DifferenceType.NODE_TYPE)
        self._compare(control.namespace_uri, test.namespace_uri, control, test,
                      DifferenceType.NAMESPACE_URI)
        self._compare(control.prefix, test.prefix, control, test,
                      DifferenceType.NAMESPACE_PREFIX)

    def _compare_node_children(self, control: Node, test: Node):
        """Compare presence and number of children, then the children themselves."""
        if self._aborted:
            return

        control_has_children = control.has_child_nodes()
        test_has_children = test.has_child_nodes()
        self._compare(control_has_children, test_has_children, control, test,
                      DifferenceType.HAS_CHILD_NODES)

        if control_has_children and test_has_children:
            control_children = control.children
            test_children = test.children
            self._compare(len(control_children), len(test_children), control, test,
                          DifferenceType.CHILD_NODELIST_LENGTH)
            self._compare_node_list(control_children, test_children)

    def _compare_node_list(self, control: list[Node], test: list[Node]):
        """
        Compare two child lists, assuming the order of children is NOT significant.

        Elements match on tag name, every other kind matches on node kind.
        The search for control child i starts at position i of the test list
        and wraps around, so repeated tag names line up in document order.
        Test positions are never consumed: two control children may match
        the same test child when siblings repeat a tag name out of order.

        Only the first min(len(control), len(test)) positions are paired and
        searched.
        """
        num_nodes = min(len(control), len(test))

        for i in range(num_nodes):
            if self._aborted:
                return

            next_control = control[i]
            j = self._find_match(next_control, test, i, num_nodes)
            next_test = test[j]

            self._compare(i, j, next_control, next_test,
                          DifferenceType.CHILD_NODELIST_SEQUENCE)
            self.compare_node(next_control, next_test)

    def _find_match(self, control: Node, test: list[Node], start: int, num_nodes: int) -> int:
        """Index of the first test node matching control, or start if there is none."""
        j = start
        while True:
            if self._matches(control, test[j]):
                return j
            j = (j + 1) % num_nodes
            if j == start:
                # been through all children
                return start

    def _matches(self, control: Node, test: Node) -> bool:
        if isinstance(control, Element):
            return isinstance(test, Element) and test.tag_name == control.tag_name
        return control.kind == test.kind

    def _compare_element(self, control: Element, test: Element):
        """Compare two elements and their attributes."""
        self._compare(control.tag_name, test.tag_name, control, test,
                      DifferenceType.ELEMENT_TAG_NAME)

        control_attrs = control.attributes
        test_attrs = test.attributes
        self._compare(len(control_attrs), len(test_attrs), control, test,
                      DifferenceType.ELEMENT_NUM_ATTRIBUTES)

        for i, attr in enumerate(control_attrs):
            if self._aborted:
                return

            compare_to = test.get_attribute_node(attr.name)
            if compare_to is not None:
                self._compare_attribute(attr, compare_to)
                # Sequence is judged by position: the name expected at index i
                # against whatever test attribute sits at index i.
                test_attr_name = test_attrs[i].name if i < len(test_attrs) else None
                self._compare(attr.name, test_attr_name, attr, compare_to,
                              DifferenceType.ATTR_SEQUENCE)
            else:
                self._compare(attr.name, None, control, test,
                              DifferenceType.ATTR_NAME_NOT_FOUND)

    def _compare_attribute(self, control: Attribute, test: Attribute):
        self._compare(control.value, test.value, control, test,
                      DifferenceType.ATTR_VALUE)
        self._compare(control.specified, test.specified, control, test,
                      DifferenceType.ATTR_VALUE_EXPLICITLY_SPECIFIED)

    def _compare_character_data(
        self,
        control: CharacterData,
        test: CharacterData,
        difference: DifferenceType
    ):
        """Character comparison used by comments, text and CDATA sections."""
        self._compare(control.data, test.data, control, test, difference)

    def _compare_document_type(self, control: DocumentType, test: DocumentType):
        self._compare(control.name, test.name, control, test,
                      DifferenceType.DOCTYPE_NAME)
        self._compare(control.public_id, test.public_id, control, test,
                      DifferenceType.DOCTYPE_PUBLIC_ID)
        self._compare(control.system_id, test.system_id, control, test,
                      DifferenceType.DOCTYPE_SYSTEM_ID)

    def _compare_processing_instruction(
        self,
        control: ProcessingInstruction,
        test: ProcessingInstruction
    ):
        self._compare(control.target, test.target, control, test,
                      DifferenceType.PROCESSING_INSTRUCTION_TARGET)
        self._compare(control.data, test.data, control, test,
                      DifferenceType.PROCESSING_INSTRUCTION_DATA)

    def _skip(self, control: Node, test: Node):
        if self._aborted:
            return
        self.skipped_count += 1
        logger.debug("Skipping comparison of %s node %s", control.kind.value, control)
        self.listener.skipped_comparison(control, test)

    def _compare(
        self,
        expected: Any,
        actual: Any,
        control: Optional[Node],
        test: Optional[Node],
        difference: DifferenceType
    ):
        """
        Report a difference if the expected and actual values are unequal.

        A fatal difference aborts the rest of the comparison after it has
        been delivered.
        """
        if self._aborted:
            return

        if values_equal(expected, actual, self.ignore_whitespace):
            return

        self.differences_found += 1
        expected_text = as_text(expected)
        actual_text = as_text(actual)
        logger.debug("%s: expected '%s' but was '%s'",
                     difference.name, expected_text, actual_text)

        self.listener.difference_found(
            expected_text, actual_text, control, test, difference
        )

        if not difference.recoverable:
            self._aborted = True
