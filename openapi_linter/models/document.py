# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""In-memory document model.

A parsed OpenAPI document is converted once into an immutable tree of
:class:`MappingNode`, :class:`SequenceNode` and :class:`ScalarNode`. Every
node records its JSON pointer (RFC 6901) from the document root, which the
lint passes use both in messages and to look up YAML source locations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union, cast

from ..exceptions import DocumentLoadError

ScalarValue = Union[str, int, float, bool, None]


def escape_pointer_token(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def unescape_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(path: str, token: Union[str, int]) -> str:
    return f"{path}/{escape_pointer_token(str(token))}"


def stringify_key(key: Any) -> str:
    """Text form of a mapping key as written in YAML/JSON (``true``, ``null``, ``200``)."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


@dataclass(frozen=True)
class ScalarNode:
    """Leaf value: string, number, boolean or null."""

    value: ScalarValue
    path: str = ""

    def child(self, segment: str) -> Optional["Node"]:
        return None

    def to_python(self) -> ScalarValue:
        return self.value


@dataclass(frozen=True)
class SequenceNode:
    """Ordered list of nodes."""

    items: Tuple["Node", ...] = ()
    path: str = ""

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "Node":
        return self.items[index]

    def child(self, segment: str) -> Optional["Node"]:
        """Return the element addressed by a decimal index segment."""
        if not (segment.isascii() and segment.isdigit()):
            return None
        if len(segment) > 1 and segment.startswith("0"):
            return None
        index = int(segment)
        if index >= len(self.items):
            return None
        return self.items[index]

    def to_python(self) -> list:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class MappingNode:
    """Ordered mapping of string keys to nodes."""

    entries: Mapping[str, "Node"] = field(default_factory=lambda: MappingProxyType({}))
    path: str = ""

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def get(self, key: str) -> Optional["Node"]:
        return self.entries.get(key)

    def keys(self):
        return self.entries.keys()

    def items(self):
        return self.entries.items()

    def child(self, segment: str) -> Optional["Node"]:
        return self.entries.get(segment)

    def to_python(self) -> Dict[str, Any]:
        return {key: value.to_python() for key, value in self.entries.items()}


Node = Union[MappingNode, SequenceNode, ScalarNode]


def build_node(raw: Any, path: str = "") -> Node:
    """Convert parsed JSON/YAML data into a node tree rooted at *path*.

    Mapping keys are stringified with :func:`stringify_key`; YAML allows
    non-string keys (``200:`` in a responses block parses as an int) while
    pointers always address them as text.
    """
    if isinstance(raw, dict):
        entries: Dict[str, Node] = {}
        for key, value in raw.items():
            name = stringify_key(key)
            entries[name] = build_node(value, join_pointer(path, name))
        return MappingNode(MappingProxyType(entries), path)
    if isinstance(raw, (list, tuple)):
        return SequenceNode(
            tuple(build_node(item, join_pointer(path, idx)) for idx, item in enumerate(raw)),
            path,
        )
    if raw is None or isinstance(raw, (str, int, float, bool)):
        return ScalarNode(raw, path)
    # Dates and other YAML-native types are kept as their text form.
    return ScalarNode(str(raw), path)


@dataclass(frozen=True)
class Document:
    """A loaded document: the root mapping plus where it came from."""

    root: MappingNode
    file_path: Optional[Path] = None
    source_map: Mapping[str, Dict[str, int]] = field(default_factory=dict)

    @classmethod
    def from_data(
        cls,
        data: Any,
        file_path: Optional[Path] = None,
        source_map: Optional[Mapping[str, Dict[str, int]]] = None,
    ) -> "Document":
        """Build a document from parsed data.

        Raises:
            DocumentLoadError: If the data is not a mapping at the top level
                or is nested too deeply to convert.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DocumentLoadError(
                f"Document root must be a mapping, got {type(data).__name__}"
            )
        try:
            root = cast(MappingNode, build_node(data))
        except RecursionError as exc:
            raise DocumentLoadError("Document nested too deeply to load") from exc
        return cls(root=root, file_path=file_path, source_map=source_map or {})

    def schemas(self) -> Optional[MappingNode]:
        """Return the ``components.schemas`` container if it is a mapping."""
        components = self.root.get("components")
        if not isinstance(components, MappingNode):
            return None
        schemas = components.get("schemas")
        if not isinstance(schemas, MappingNode):
            return None
        return schemas
