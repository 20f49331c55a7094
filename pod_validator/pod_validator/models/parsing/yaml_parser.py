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

"""YAML document loader with source-location tracking."""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Union, Tuple

from ...exceptions import DecodeError, FileError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


class YamlParser:
    """Loads a YAML document into plain data plus a JSON-pointer source map.

    The parser holds no state between calls, so one instance can be shared.
    """

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map_from_yaml(cls, content: str) -> SourceMap:
        """Build a mapping from YAML JSON-pointer-like paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        root = yaml.compose(content, Loader=yaml.SafeLoader)
        if root is None:
            return source_map

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
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    child_path = f"{path}/{cls._json_pointer_escape(str(key))}"
                    _walk(value_node, child_path)
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    @staticmethod
    def _decode_error(exc: yaml.YAMLError) -> DecodeError:
        mark = getattr(exc, "problem_mark", None)
        problem = getattr(exc, "problem", None) or str(exc)
        if mark is None:
            return DecodeError(f"YAML decode error: {problem}")
        return DecodeError(
            f"YAML decode error: {problem}",
            line=int(mark.line) + 1,
            column=int(mark.column) + 1,
        )

    def load_from_string_with_source(
        self, content: Union[str, bytes]
    ) -> Tuple[Any, SourceMap]:
        """Parse YAML content and return (data, source_map).

        source_map keys are JSON-pointer-like YAML paths (e.g. "/spec/containers/0/image").
        Values contain 1-based line/column. An empty document yields an empty mapping.
        """
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DecodeError(f"Document is not valid UTF-8: {exc}") from exc

        try:
            data = yaml.safe_load(content)
            source_map = self._build_source_map_from_yaml(content)
        except yaml.YAMLError as exc:
            raise self._decode_error(exc) from exc

        if data is None:
            data = {}
        return data, source_map

    def load_file_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Read a YAML file and return (data, source_map).

        Raises:
            FileError: If the file is missing, not a regular file or unreadable
            DecodeError: If the content is not valid YAML
        """
        path = Path(file_path)

        if not path.exists():
            raise FileError(f"File not found: {path}")

        if not path.is_file():
            raise FileError(f"Path is not a file: {path}")

        logger.debug(f"Loading document file: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise FileError(f"Error reading file: {exc}") from exc

        return self.load_from_string_with_source(content)


# Shared parser instance
yaml_parser = YamlParser()
