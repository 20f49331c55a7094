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

"""Custom exceptions for the pod validator.

Validation violations are never raised; they are collected as values. The
exceptions below abort the current invocation.
"""

from typing import Optional


class PodValidatorError(Exception):
    """Base exception for pod-validator related errors."""

    exit_code = 1


class UsageError(PodValidatorError):
    """Exception raised when the tool is invoked with wrong arguments."""

    exit_code = 2


class FileError(PodValidatorError):
    """Exception raised when the document file is missing or unreadable."""

    exit_code = 3


class DecodeError(PodValidatorError):
    """Exception raised for malformed YAML or a type mismatch during decode."""

    exit_code = 4

    def __init__(
        self,
        reason: str,
        yaml_path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.reason = reason
        self.yaml_path = yaml_path
        self.line = line
        self.column = column
        super().__init__(self._compose())

    def _compose(self) -> str:
        message = self.reason
        if self.yaml_path:
            message += f" (yaml_path={self.yaml_path})"
        if self.line is not None:
            message += f" at line {self.line}"
            if self.column is not None:
                message += f", column {self.column}"
        return message
