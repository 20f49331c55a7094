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

"""Structural JSON Schema for pod documents.

The schema only constrains shape: which paths hold mappings, sequences or
scalars. Value rules (enumerations, patterns, ranges) are not expressed here;
they live in the validator so every violation is collected instead of aborting
the decode. Numeric fields are left unconstrained because a wrong-typed port is
a violation, not a decode failure.
"""

import datetime
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator, validators

JsonPointer = str

_SCALAR = {"type": ["string", "number", "boolean", "null"]}
_STRING_MAP = {"type": ["object", "null"], "additionalProperties": _SCALAR}


def _object(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": ["object", "null"], "properties": properties}


_HTTP_GET = _object({"path": _SCALAR, "port": {}})
_PROBE = _object({"httpGet": _HTTP_GET})

_CONTAINER = {
    "type": ["object", "null"],
    "properties": {
        "name": _SCALAR,
        "image": _SCALAR,
        "ports": _object({"containerPort": {}, "protocol": _SCALAR}),
        "readinessProbe": _PROBE,
        "livenessProbe": _PROBE,
        "resources": _object({"requests": _STRING_MAP, "limits": _STRING_MAP}),
    },
}

POD_SHAPE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Pod document shape",
    "type": "object",
    "properties": {
        "apiVersion": _SCALAR,
        "kind": _SCALAR,
        "metadata": _object({
            "name": _SCALAR,
            "namespace": _SCALAR,
            "labels": _STRING_MAP,
        }),
        "spec": _object({
            "os": _object({"name": _SCALAR}),
            "containers": {"type": ["array", "null"], "items": _CONTAINER},
        }),
    },
}


def _is_string(checker, instance) -> bool:
    # safe_load resolves unquoted dates; they still read as text.
    return isinstance(instance, (str, datetime.date))


ShapeValidator = validators.extend(
    Draft7Validator,
    type_checker=Draft7Validator.TYPE_CHECKER.redefine("string", _is_string),
)


def json_pointer(path) -> JsonPointer:
    """Render a jsonschema error path (deque of keys/indexes) as a JSON pointer."""
    tokens = [str(p).replace("~", "~0").replace("/", "~1") for p in path]
    return "/" + "/".join(tokens) if tokens else ""


def _path_key(error) -> List:
    # Sequence indexes sort numerically, mapping keys by name.
    return [(0, p, "") if isinstance(p, int) else (1, 0, str(p)) for p in error.absolute_path]


def find_shape_error(data: Any) -> Optional[Dict[str, str]]:
    """Return the first shape mismatch by path, or None.

    The result carries ``message`` and ``yaml_path``.
    """
    errors: List = list(ShapeValidator(POD_SHAPE_SCHEMA).iter_errors(data))
    if not errors:
        return None

    first = min(errors, key=_path_key)
    return {"message": first.message, "yaml_path": json_pointer(first.absolute_path)}
