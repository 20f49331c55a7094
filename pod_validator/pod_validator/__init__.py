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

"""Validation engine for pod-like deployment documents."""

from .exceptions import DecodeError, FileError, PodValidatorError, UsageError
from .models.parsing.data_parser import decode_document, load_document
from .validator import ValidationResult, Violation, validate_file, validate_pod, validate_text

__all__ = [
    "DecodeError",
    "FileError",
    "PodValidatorError",
    "UsageError",
    "ValidationResult",
    "Violation",
    "decode_document",
    "load_document",
    "validate_file",
    "validate_pod",
    "validate_text",
]
