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

"""Validation package for pod documents."""

import logging
from pathlib import Path
from typing import Union

from ..models.parsing.data_parser import decode_document, load_document_with_source
from ..models.parsing.yaml_parser import yaml_parser
from .pod_rules import validate_pod
from .report import ValidationResult, Violation

__all__ = ['validate_file', 'validate_text', 'validate_pod', 'ValidationResult', 'Violation']

logger = logging.getLogger(__name__)


def validate_text(content: Union[str, bytes]) -> ValidationResult:
    """Decode and validate YAML content.

    Raises:
        DecodeError: If the content is malformed or has the wrong shape
    """
    document, source_map = load_document_with_source(content)
    result = ValidationResult(source_map=source_map)
    result.add_violations(validate_pod(document))
    return result


def validate_file(file_path: Union[str, Path]) -> ValidationResult:
    """Load, decode and validate one YAML file.

    Args:
        file_path: Path to the document

    Returns:
        ValidationResult holding every violation found, in rule order

    Raises:
        FileError: If the file is missing or unreadable
        DecodeError: If the content is malformed or has the wrong shape
    """
    path = Path(file_path)
    data, source_map = yaml_parser.load_file_with_source(path)
    document = decode_document(data, source_map)

    result = ValidationResult(path, source_map)
    result.add_violations(validate_pod(document))
    logger.info(f"{path}: {len(result.violations)} violation(s)")
    return result
