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

"""Decoder from a parsed YAML tree into the typed pod model."""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union
import logging

from .yaml_parser import SourceMap, yaml_parser
from ..pod import (
    Container,
    Document,
    HTTPGetAction,
    IntegerValue,
    Metadata,
    PodOS,
    PortSpec,
    Probe,
    ResourceRequirements,
    Spec,
)
from ..pod_schema import find_shape_error
from ...exceptions import DecodeError
from ...file_io.source_location import lookup_source
from ...utils.numeric import normalize_integer, scalar_text

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return scalar_text(value)


def _integer(node: Mapping[str, Any], key: str) -> Optional[IntegerValue]:
    if key not in node or node[key] is None:
        return None
    raw = node[key]
    return IntegerValue(raw=raw, value=normalize_integer(raw))


def _string_map(value: Optional[Mapping[Any, Any]]) -> Optional[Mapping[str, str]]:
    if value is None:
        return None
    return MappingProxyType({str(k): scalar_text(v) for k, v in value.items()})


def _mapping(node: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    # The shape check guarantees mappings or null at every object path.
    return node.get(key)


def _decode_probe(node: Optional[Mapping[str, Any]]) -> Optional[Probe]:
    if node is None:
        return None
    http_get = _mapping(node, "httpGet") or {}
    return Probe(
        http_get=HTTPGetAction(
            path=_text(http_get.get("path")),
            port=_integer(http_get, "port"),
        )
    )


def _decode_port(node: Optional[Mapping[str, Any]]) -> Optional[PortSpec]:
    if node is None:
        return None
    return PortSpec(
        container_port=_integer(node, "containerPort"),
        protocol=_text(node.get("protocol")),
    )


def _decode_container(node: Mapping[str, Any]) -> Container:
    resources = _mapping(node, "resources") or {}
    return Container(
        name=_text(node.get("name")),
        image=_text(node.get("image")),
        port=_decode_port(_mapping(node, "ports")),
        readiness_probe=_decode_probe(_mapping(node, "readinessProbe")),
        liveness_probe=_decode_probe(_mapping(node, "livenessProbe")),
        resources=ResourceRequirements(
            requests=_string_map(resources.get("requests")),
            limits=_string_map(resources.get("limits")),
        ),
    )


def _decode_spec(node: Mapping[str, Any]) -> Spec:
    os_node = _mapping(node, "os")
    containers = node.get("containers")
    return Spec(
        os=PodOS(name=_text(os_node.get("name"))) if os_node is not None else None,
        # A null list entry is an empty container, not an absent one.
        containers=tuple(_decode_container(c or {}) for c in containers) if containers is not None else None,
    )


def decode_document(data: Any, source_map: Optional[SourceMap] = None) -> Document:
    """Decode a parsed YAML tree into a :class:`Document`.

    Unknown fields are ignored and absent fields stay ``None``. A value whose
    shape does not fit the pod layout (for example a list where a mapping is
    expected) raises :class:`DecodeError` naming the offending path.
    """
    issue = find_shape_error(data)
    if issue is not None:
        loc = lookup_source(source_map, issue["yaml_path"])
        raise DecodeError(
            f"Type mismatch: {issue['message']}",
            yaml_path=issue["yaml_path"] or "/",
            line=loc.line,
            column=loc.column,
        )

    metadata = _mapping(data, "metadata") or {}
    document = Document(
        api_version=_text(data.get("apiVersion")),
        kind=_text(data.get("kind")),
        metadata=Metadata(
            name=_text(metadata.get("name")),
            namespace=_text(metadata.get("namespace")),
            labels=_string_map(metadata.get("labels")),
        ),
        spec=_decode_spec(_mapping(data, "spec") or {}),
    )
    containers = document.spec.containers
    logger.debug(f"Decoded {document.kind} document with {len(containers or ())} container(s)")
    return document


def load_document(content: Union[str, bytes]) -> Document:
    """Parse YAML content and decode it into a :class:`Document`."""
    document, _ = load_document_with_source(content)
    return document


def load_document_with_source(content: Union[str, bytes]) -> Tuple[Document, SourceMap]:
    data, source_map = yaml_parser.load_from_string_with_source(content)
    return decode_document(data, source_map), source_map
