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

"""Configuration management for the pod validator.

Only the tool's own behaviour (logging, output format) is configurable. The
validation rules are fixed in :mod:`pod_validator.validator.pod_rules`.
"""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging

OUTPUT_FORMATS = ("human", "json", "github-actions")


@dataclass
class ValidatorConfig:
    """Configuration class for a pod-validator run."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    output_format: str = "human"

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        output_format = os.getenv('POD_VALIDATOR_FORMAT', 'human').lower()
        if output_format not in OUTPUT_FORMATS:
            output_format = 'human'
        return cls(
            log_level=os.getenv('POD_VALIDATOR_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('POD_VALIDATOR_PRINT_LEVEL', 'WARNING'),
            output_format=output_format,
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)
        if self.output_format != "human":
            # stdout carries a machine-readable report only
            stderr_level = logging.DEBUG

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)
