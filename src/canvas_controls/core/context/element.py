"""Read-only element tree used by the context builder.

The editor's document model is external; this module gives the engine a
small, immutable stand-in with the queries the builder needs (class and
attribute lookups, descendant searches, closest-ancestor lookups). Trees
are built from plain mappings, usually YAML selection files:

    page:
      classes: [bloom-page]
      attributes: {data-activity: drag-word-chooser}
      children:
        - id: el-1
          classes: [bloom-canvas-element]
          selected: true
          children:
            - classes: [bloom-imageContainer]
              children:
                - tag: img
                  attributes: {src: cat.png}
    hints:
      canExpandToFillSpace: true
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import yaml

from canvas_controls.core.exceptions import ElementLoadError


class ElementNode:
    """One node of an element tree. Not mutable after construction."""

    __slots__ = ("tag", "classes", "attributes", "text", "children", "parent")

    def __init__(
        self,
        tag: str = "div",
        *,
        classes: Tuple[str, ...] = (),
        attributes: Optional[Mapping[str, str]] = None,
        text: str = "",
        children: Tuple["ElementNode", ...] = (),
    ) -> None:
        object.__setattr__(self, "tag", tag)
        object.__setattr__(self, "classes", tuple(classes))
        object.__setattr__(self, "attributes", MappingProxyType(dict(attributes or {})))
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "children", tuple(children))
        object.__setattr__(self, "parent", None)
        for child in self.children:
            if child.parent is not None:
                raise ElementLoadError(
                    "Element already belongs to another parent",
                    context={"element": child.describe()},
                )
            object.__setattr__(child, "parent", self)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"ElementNode is read-only (cannot set {name!r})")

    def __repr__(self) -> str:
        return f"ElementNode({self.describe()})"

    # ----- attribute and class queries -----

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    @property
    def class_string(self) -> str:
        return " ".join(self.classes)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def style_value(self, name: str) -> Optional[str]:
        """Return a property from the inline ``style`` attribute, if declared."""
        for declaration in self.attributes.get("style", "").split(";"):
            prop, sep, value = declaration.partition(":")
            if sep and prop.strip().lower() == name.lower():
                return value.strip()
        return None

    def describe(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        classes = "".join(f".{c}" for c in self.classes)
        return f"{self.tag}{ident}{classes}"

    # ----- tree queries -----

    def iter_descendants(self) -> Iterator["ElementNode"]:
        """Yield descendants in document order (depth first)."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def find_all(self, class_name: Optional[str] = None, *, tag: Optional[str] = None) -> List["ElementNode"]:
        return [
            node
            for node in self.iter_descendants()
            if (class_name is None or node.has_class(class_name)) and (tag is None or node.tag == tag)
        ]

    def find(self, class_name: Optional[str] = None, *, tag: Optional[str] = None) -> Optional["ElementNode"]:
        for node in self.iter_descendants():
            if (class_name is None or node.has_class(class_name)) and (tag is None or node.tag == tag):
                return node
        return None

    def query_attribute(self, name: str, value: Optional[str] = None) -> Optional["ElementNode"]:
        """First descendant carrying attribute ``name`` (optionally equal to ``value``)."""
        for node in self.iter_descendants():
            if name in node.attributes and (value is None or node.attributes[name] == value):
                return node
        return None

    def closest(self, class_name: str) -> Optional["ElementNode"]:
        """This node or the nearest ancestor with ``class_name``."""
        node: Optional[ElementNode] = self
        while node is not None:
            if node.has_class(class_name):
                return node
            node = node.parent
        return None


@dataclass(frozen=True)
class Selection:
    """A selected element, its page root and externally supplied hints."""

    element: ElementNode
    root: ElementNode
    hints: Mapping[str, Any] = field(default_factory=dict)

    def hint(self, name: str, default: Any = None) -> Any:
        return self.hints.get(name, default)


def _as_str_tuple(value: Any, *, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, list):
        return tuple(str(v) for v in value)
    raise ElementLoadError(f"'classes' must be a list or string at {where}", context={"at": where})


def _build_node(raw: Mapping[str, Any], where: str, selected: List[ElementNode]) -> ElementNode:
    if not isinstance(raw, Mapping):
        raise ElementLoadError(f"Element at {where} must be a mapping", context={"at": where})
    attributes: Dict[str, str] = {}
    raw_attrs = raw.get("attributes") or {}
    if not isinstance(raw_attrs, Mapping):
        raise ElementLoadError(f"'attributes' must be a mapping at {where}", context={"at": where})
    for key, value in raw_attrs.items():
        attributes[str(key)] = "" if value is None else str(value)
    if raw.get("id") is not None:
        attributes["id"] = str(raw["id"])

    raw_children = raw.get("children") or []
    if not isinstance(raw_children, list):
        raise ElementLoadError(f"'children' must be a list at {where}", context={"at": where})
    children = tuple(
        _build_node(child, f"{where}.children[{i}]", selected) for i, child in enumerate(raw_children)
    )
    node = ElementNode(
        str(raw.get("tag", "div")),
        classes=_as_str_tuple(raw.get("classes"), where=where),
        attributes=attributes,
        text=str(raw.get("text", "") or ""),
        children=children,
    )
    if raw.get("selected"):
        selected.append(node)
    return node


def build_tree(raw: Mapping[str, Any]) -> ElementNode:
    """Build an element tree from a mapping, ignoring any ``selected`` markers."""
    return _build_node(raw, "root", [])


def load_selection(source: Union[str, Path, Mapping[str, Any]]) -> Selection:
    """Load a selection document from a YAML file path or a mapping.

    Raises:
        ElementLoadError: If the document is malformed or does not mark exactly
            one element as ``selected``.
    """
    if isinstance(source, Mapping):
        data: Any = source
        origin = "<mapping>"
    else:
        path = Path(source)
        origin = str(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ElementLoadError(f"Selection file not found: {path}", context={"path": origin}) from exc
        except yaml.YAMLError as exc:
            raise ElementLoadError(f"Invalid YAML in {path}: {exc}", context={"path": origin}) from exc

    if not isinstance(data, Mapping) or "page" not in data:
        raise ElementLoadError("Selection document must have a top-level 'page' mapping", context={"path": origin})

    selected: List[ElementNode] = []
    root = _build_node(data["page"], "page", selected)
    if len(selected) != 1:
        raise ElementLoadError(
            f"Selection document must mark exactly one element as selected (found {len(selected)})",
            context={"path": origin, "selected": [n.describe() for n in selected]},
        )
    hints = data.get("hints") or {}
    if not isinstance(hints, Mapping):
        raise ElementLoadError("'hints' must be a mapping", context={"path": origin})
    return Selection(element=selected[0], root=root, hints=dict(hints))


__all__ = ["ElementNode", "Selection", "build_tree", "load_selection"]
