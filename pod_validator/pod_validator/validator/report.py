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

"""Violation records and per-file validation results."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Any, Optional

from ..file_io.source_location import SourceLocation, lookup_source

# Violation codes
REQUIRED = "required"
INVALID_VALUE = "invalid_value"
PATTERN = "pattern"
WRONG_TYPE = "type"
OUT_OF_RANGE = "range"
UNKNOWN_KEY = "unknown_key"


@dataclass(frozen=True)
class Violation:
    """One failed field-level rule.

    ``field`` is the dotted location used in messages (``container[0].image``),
    ``yaml_path`` the JSON pointer into the document and ``container_index``
    the container position, or None for pod-level rules.
    """
    field: str
    yaml_path: str
    code: str
    message: str
    container_index: Optional[int] = None

    def __str__(self) -> str:
        return self.message


class ValidationResult:
    """Container for validation results for a single document."""

    def __init__(self, file_path: Optional[Path] = None, source_map: Optional[Dict[str, Dict[str, int]]] = None):
        """Initialize validation result.

        Args:
            file_path: Path to the validated file, if it came from one
            source_map: JSON pointer to line/column map of the document
        """
        self.file_path = file_path
        self.source_map = source_map
        self.violations: List[Violation] = []

    @property
    def valid(self) -> bool:
        return not self.violations

    def add_violations(self, violations: List[Violation]):
        """Append violations, keeping their order."""
        self.violations.extend(violations)

    def locate(self, violation: Violation) -> SourceLocation:
        loc = lookup_source(self.source_map, violation.yaml_path)
        return SourceLocation(
            file_path=self.file_path,
            yaml_path=loc.yaml_path,
            line=loc.line,
            column=loc.column,
        )

    def to_dict(self) -> Dict[str, Any]:
        errors = []
        for violation in self.violations:
            error: Dict[str, Any] = {
                'message': violation.message,
                'field': violation.field,
                'yaml_path': violation.yaml_path,
                'code': violation.code,
            }
            if violation.container_index is not None:
                error['container_index'] = violation.container_index
            loc = self.locate(violation)
            if loc.line is not None:
                error['line'] = loc.line
            if loc.column is not None:
                error['column'] = loc.column
            errors.append(error)
        return {
            'file': str(self.file_path) if self.file_path is not None else None,
            'valid': self.valid,
            'errors': errors,
        }
