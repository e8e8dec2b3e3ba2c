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

"""JSON / YAML document loader with caching support."""

import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Union, Optional

from ...config import linter_config
from ...exceptions import DocumentLoadError
from ..document import Document, join_pointer, stringify_key

logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')

_TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that leaves date-like scalars as plain strings.

    Example values such as ``2023-02-30`` are common in API descriptions and
    must not fail the whole document.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def is_yaml_path(file_path: Union[str, Path]) -> bool:
    """Whether *file_path* is parsed as YAML; everything else is JSON."""
    return str(file_path).lower().endswith(YAML_SUFFIXES)


class DocumentParser:
    """Loads OpenAPI documents into :class:`Document` trees."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize the parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else linter_config.cache_enabled
        self._cache: Dict[Path, Document] = {}

    @staticmethod
    def _build_source_map_from_yaml(content: str) -> Dict[str, Dict[str, int]]:
        """Build a mapping from JSON pointers to 1-based line/column.

        This walks PyYAML's composed node tree so we can track locations without
        changing the parsed data shapes returned by the data load.
        """
        source_map: Dict[str, Dict[str, int]] = {}

        loader = DocumentLoader(content)
        try:
            root = loader.get_single_node()
        except (yaml.YAMLError, RecursionError):
            # Parsing errors are reported by the data load.
            loader.dispose()
            return source_map

        if root is None:
            loader.dispose()
            return source_map

        def _key_text(key_node) -> str:
            # Same spelling as the node tree: construct the key, then stringify it.
            try:
                return stringify_key(loader.construct_object(key_node, deep=True))
            except (yaml.YAMLError, ValueError, TypeError):
                return str(key_node.value)

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    if not isinstance(key_node, yaml.nodes.ScalarNode):
                        continue
                    _walk(value_node, join_pointer(path, _key_text(key_node)))
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, join_pointer(path, idx))

        try:
            _walk(root, "")
        except RecursionError:
            logger.debug("Source map truncated: document nested too deeply")
        finally:
            loader.dispose()
        return source_map

    def load_from_string(
        self, content: str, yaml_format: bool = True, file_path: Optional[Path] = None
    ) -> Document:
        """Parse *content* as YAML (default) or JSON.

        Raises:
            DocumentLoadError: If the content cannot be parsed or its root is
                not a mapping.
        """
        source_map: Dict[str, Dict[str, int]] = {}
        kind = "YAML" if yaml_format else "JSON"
        try:
            if yaml_format:
                data: Any = yaml.load(content, Loader=DocumentLoader)
                source_map = self._build_source_map_from_yaml(content)
            else:
                data = json.loads(content)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise DocumentLoadError(f"Failed to parse {kind} content: {exc}") from exc
        except RecursionError as exc:
            raise DocumentLoadError(f"Failed to parse {kind} content: document nested too deeply") from exc
        except (ValueError, TypeError) as exc:
            # Explicitly tagged values (e.g. ``!!timestamp 2020-13-45``) fail in the constructor.
            raise DocumentLoadError(f"Failed to parse {kind} content: {exc}") from exc
        return Document.from_data(data, file_path=file_path, source_map=source_map)

    def load(self, file_path: Union[str, Path]) -> Document:
        """Load a document from disk.

        Files ending in ``.yaml``/``.yml`` are parsed as YAML, anything
        else as JSON.

        Raises:
            DocumentLoadError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise DocumentLoadError(f"Spec file not found: {path}")

        if not path.is_file():
            raise DocumentLoadError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading document from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading document: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read spec file {path}: {exc}") from exc

        try:
            document = self.load_from_string(content, yaml_format=is_yaml_path(path), file_path=path)
        except DocumentLoadError as exc:
            raise DocumentLoadError(f"Failed to load spec file {path}: {exc}") from exc

        if self.cache_enabled:
            self._cache[path] = document
        return document

    def clear_cache(self):
        """Clear the document cache."""
        self._cache.clear()
        logger.debug("Document cache cleared")


# Global parser instance
document_parser = DocumentParser()
