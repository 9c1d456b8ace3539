"""In-memory XML node model walked by the comparison engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .models import NodeKind


# Kinds the engine knows how to compare; anything else is skipped.
COMPARABLE_KINDS = frozenset({
    NodeKind.ELEMENT,
    NodeKind.CDATA_SECTION,
    NodeKind.COMMENT,
    NodeKind.DOCUMENT_TYPE,
    NodeKind.PROCESSING_INSTRUCTION,
    NodeKind.TEXT,
})


@dataclass(eq=False, kw_only=True)
class Node:
    """
    Base class for every node in a tree.

    Nodes compare by identity. `children` is kept in document order and
    each child's `parent` is set when the node is constructed or a child
    is appended.
    """
    kind: ClassVar[NodeKind]

    namespace_uri: Optional[str] = None
    prefix: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    parent: Optional[Node] = field(default=None, repr=False)

    def __post_init__(self):
        for child in self.children:
            child.parent = self

    def append_child(self, child: Node) -> Node:
        child.parent = self
        self.children.append(child)
        return child

    def has_child_nodes(self) -> bool:
        return len(self.children) > 0

    @property
    def node_name(self) -> str:
        return f"#{self.kind.value}"


@dataclass(eq=False)
class Attribute(Node):
    kind = NodeKind.ATTRIBUTE

    name: str
    value: Optional[str] = None
    specified: bool = True

    @property
    def node_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return f'{self.name}="{self.value}"'


@dataclass(eq=False)
class Element(Node):
    kind = NodeKind.ELEMENT

    tag_name: str
    attributes: list[Attribute] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        for attr in self.attributes:
            attr.parent = self

    @property
    def node_name(self) -> str:
        return self.tag_name

    def set_attribute_node(self, attr: Attribute) -> Attribute:
        """Add or replace an attribute, keeping the position of a replaced one."""
        attr.parent = self
        for i, existing in enumerate(self.attributes):
            if existing.name == attr.name:
                self.attributes[i] = attr
                return attr
        self.attributes.append(attr)
        return attr

    def get_attribute_node(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def has_attribute(self, name: str) -> bool:
        return self.get_attribute_node(name) is not None

    def get_attribute(self, name: str) -> Optional[str]:
        attr = self.get_attribute_node(name)
        return attr.value if attr is not None else None

    def __str__(self) -> str:
        if self.attributes:
            return f"<{self.tag_name} ...>"
        return f"<{self.tag_name}>"


@dataclass(eq=False)
class CharacterData(Node):
    """Shared base for nodes whose payload is a run of characters."""
    kind = NodeKind.TEXT

    data: str = ""


@dataclass(eq=False)
class Text(CharacterData):
    kind = NodeKind.TEXT

    def __str__(self) -> str:
        return f'"{self.data}"'


@dataclass(eq=False)
class CDataSection(CharacterData):
    kind = NodeKind.CDATA_SECTION

    @property
    def node_name(self) -> str:
        return "#cdata-section"

    def __str__(self) -> str:
        return f"<![CDATA[{self.data}]]>"


@dataclass(eq=False)
class Comment(CharacterData):
    kind = NodeKind.COMMENT

    def __str__(self) -> str:
        return f"<!--{self.data}-->"


@dataclass(eq=False)
class DocumentType(Node):
    kind = NodeKind.DOCUMENT_TYPE

    name: str
    public_id: Optional[str] = None
    system_id: Optional[str] = None

    @property
    def node_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        if self.public_id:
            return f'<!DOCTYPE {self.name} PUBLIC "{self.public_id}" "{self.system_id}">'
        if self.system_id:
            return f'<!DOCTYPE {self.name} SYSTEM "{self.system_id}">'
        return f"<!DOCTYPE {self.name}>"


@dataclass(eq=False)
class ProcessingInstruction(Node):
    kind = NodeKind.PROCESSING_INSTRUCTION

    target: str
    data: str = ""

    @property
    def node_name(self) -> str:
        return self.target

    def __str__(self) -> str:
        return f"<?{self.target} {self.data}?>"


@dataclass(eq=False)
class EntityReference(Node):
    kind = NodeKind.ENTITY_REFERENCE

    name: str

    @property
    def node_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return f"&{self.name};"


@dataclass(eq=False)
class Document(Node):
    kind = NodeKind.DOCUMENT

    @property
    def document_element(self) -> Optional[Element]:
        for child in self.children:
            if isinstance(child, Element):
                return child
        return None

    @property
    def doctype(self) -> Optional[DocumentType]:
        for child in self.children:
            if isinstance(child, DocumentType):
                return child
        return None

    def __str__(self) -> str:
        return "#document"
