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

"""Typed model of a pod document.

Every entity is frozen and built once by the decoder. Optional nested objects
are ``None`` when absent so that structural checks that only apply to a present
parent can be skipped.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class IntegerValue:
    """A numeric field as parsed, with its normalized integral value.

    ``value`` is None when ``raw`` is not representable as an integer.
    """
    raw: Any
    value: Optional[int] = None

    @property
    def is_integer(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class Metadata:
    name: Optional[str] = None
    namespace: Optional[str] = None
    labels: Optional[Mapping[str, str]] = None


@dataclass(frozen=True)
class PodOS:
    name: Optional[str] = None


@dataclass(frozen=True)
class PortSpec:
    container_port: Optional[IntegerValue] = None
    protocol: Optional[str] = None


@dataclass(frozen=True)
class HTTPGetAction:
    path: Optional[str] = None
    port: Optional[IntegerValue] = None


@dataclass(frozen=True)
class Probe:
    http_get: HTTPGetAction = field(default_factory=HTTPGetAction)


@dataclass(frozen=True)
class ResourceRequirements:
    requests: Optional[Mapping[str, str]] = None
    limits: Optional[Mapping[str, str]] = None


@dataclass(frozen=True)
class Container:
    name: Optional[str] = None
    image: Optional[str] = None
    port: Optional[PortSpec] = None
    readiness_probe: Optional[Probe] = None
    liveness_probe: Optional[Probe] = None
    resources: ResourceRequirements = field(default_factory=ResourceRequirements)


@dataclass(frozen=True)
class Spec:
    os: Optional[PodOS] = None
    containers: Optional[Tuple[Container, ...]] = None


@dataclass(frozen=True)
class Document:
    """Top-level pod document."""
    api_version: Optional[str] = None
    kind: Optional[str] = None
    metadata: Metadata = field(default_factory=Metadata)
    spec: Spec = field(default_factory=Spec)
