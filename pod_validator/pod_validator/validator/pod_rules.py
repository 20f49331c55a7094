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

"""Field-level rules for pod documents.

Every function here is pure: it reads the decoded model and returns its own
list of violations. Lists are concatenated level by level, which fixes the
reporting order: pod-level checks, then containers by index, and within a
container name, image, ports, readinessProbe, livenessProbe, resources.
"""

import re
from typing import List, Mapping, Optional

from ..models.pod import Container, Document, IntegerValue, Probe, ResourceRequirements
from .report import (
    INVALID_VALUE,
    OUT_OF_RANGE,
    PATTERN,
    REQUIRED,
    UNKNOWN_KEY,
    WRONG_TYPE,
    Violation,
)

API_VERSION = "v1"
KIND = "Pod"
OS_NAMES = ("linux", "windows")
PROTOCOLS = ("TCP", "UDP")
IMAGE_REGISTRY = "registry.bigbrother.io"
IMAGE_REGISTRY_PREFIX = IMAGE_REGISTRY + "/"
IMAGE_TAG_SEPARATOR = ":"
PORT_MIN = 1
PORT_MAX = 65535

# Accepted languages, matched against the whole value.
CONTAINER_NAME_PATTERN = re.compile(r"[a-z0-9_]+")
CPU_PATTERN = re.compile(r"[0-9]+")
MEMORY_PATTERN = re.compile(r"[0-9]+(Gi|Mi|Ki)")

RESOURCE_SECTIONS = ("requests", "limits")


def _matches(pattern: "re.Pattern[str]", value: str) -> bool:
    return pattern.fullmatch(value) is not None


def _check_port_number(
    value: Optional[IntegerValue],
    *,
    field: str,
    yaml_path: str,
    index: int,
) -> List[Violation]:
    """Required, integral, and within PORT_MIN..PORT_MAX."""
    if value is None:
        return [Violation(field, yaml_path, REQUIRED, f"{field} is required", index)]
    if not value.is_integer:
        return [Violation(field, yaml_path, WRONG_TYPE, f"{field} must be an integer", index)]
    if not PORT_MIN <= value.value <= PORT_MAX:
        return [Violation(field, yaml_path, OUT_OF_RANGE, f"{field} must be {PORT_MIN}-{PORT_MAX}", index)]
    return []


def _check_top_level(document: Document) -> List[Violation]:
    violations: List[Violation] = []

    if document.api_version != API_VERSION:
        code = REQUIRED if document.api_version is None else INVALID_VALUE
        violations.append(Violation("apiVersion", "/apiVersion", code, f"apiVersion must be '{API_VERSION}'"))

    if document.kind != KIND:
        code = REQUIRED if document.kind is None else INVALID_VALUE
        violations.append(Violation("kind", "/kind", code, f"kind must be '{KIND}'"))

    if not document.metadata.name:
        violations.append(Violation("metadata.name", "/metadata/name", REQUIRED, "metadata.name is required"))

    if not document.spec.containers:
        violations.append(
            Violation("spec.containers", "/spec/containers", REQUIRED, "spec.containers must not be empty")
        )

    pod_os = document.spec.os
    if pod_os is not None and pod_os.name not in OS_NAMES:
        violations.append(
            Violation(
                "spec.os.name",
                "/spec/os/name",
                REQUIRED if not pod_os.name else INVALID_VALUE,
                "spec.os.name must be 'linux' or 'windows'",
            )
        )

    return violations


def validate_probe(probe: Probe, index: int, probe_type: str) -> List[Violation]:
    """Check the httpGet action of a present probe."""
    violations: List[Violation] = []
    prefix = f"container[{index}].{probe_type}.httpGet"
    base_path = f"/spec/containers/{index}/{probe_type}/httpGet"
    path = probe.http_get.path

    if not path:
        violations.append(Violation(f"{prefix}.path", f"{base_path}/path", REQUIRED, f"{prefix}.path is required", index))
    elif not path.startswith("/"):
        violations.append(
            Violation(f"{prefix}.path", f"{base_path}/path", INVALID_VALUE, f"{prefix}.path must be absolute", index)
        )

    violations.extend(
        _check_port_number(probe.http_get.port, field=f"{prefix}.port", yaml_path=f"{base_path}/port", index=index)
    )
    return violations


def _validate_resource_map(resources: Mapping[str, str], index: int, section: str) -> List[Violation]:
    violations: List[Violation] = []
    prefix = f"container[{index}].resources.{section}"
    base_path = f"/spec/containers/{index}/resources/{section}"

    for key, value in resources.items():
        yaml_path = f"{base_path}/{key.replace('~', '~0').replace('/', '~1')}"
        if key == "cpu":
            if not _matches(CPU_PATTERN, value):
                violations.append(Violation(f"{prefix}.cpu", yaml_path, PATTERN, f"{prefix}.cpu must be integer", index))
        elif key == "memory":
            if not _matches(MEMORY_PATTERN, value):
                violations.append(
                    Violation(f"{prefix}.memory", yaml_path, PATTERN, f"{prefix}.memory must have units Gi, Mi or Ki", index)
                )
        else:
            violations.append(
                Violation(f"{prefix}.{key}", yaml_path, UNKNOWN_KEY, f"{prefix} contains unknown key '{key}'", index)
            )

    return violations


def validate_resources(resources: ResourceRequirements, index: int) -> List[Violation]:
    """Require requests or limits, then check every key of both maps."""
    if not resources.requests and not resources.limits:
        field = f"container[{index}].resources"
        return [Violation(field, f"/spec/containers/{index}/resources", REQUIRED, f"{field} is required", index)]

    violations: List[Violation] = []
    for section in RESOURCE_SECTIONS:
        resource_map = getattr(resources, section)
        if resource_map:
            violations.extend(_validate_resource_map(resource_map, index, section))
    return violations


def validate_container(container: Container, index: int) -> List[Violation]:
    violations: List[Violation] = []
    prefix = f"container[{index}]"
    base_path = f"/spec/containers/{index}"

    # name
    if not container.name:
        violations.append(Violation(f"{prefix}.name", f"{base_path}/name", REQUIRED, f"{prefix}.name is required", index))
    elif not _matches(CONTAINER_NAME_PATTERN, container.name):
        violations.append(
            Violation(f"{prefix}.name", f"{base_path}/name", PATTERN, f"{prefix}.name must be snake_case", index)
        )

    # image
    image = container.image
    if not image:
        violations.append(Violation(f"{prefix}.image", f"{base_path}/image", REQUIRED, f"{prefix}.image is required", index))
    else:
        # One image rule; the message names each part that failed.
        problems = []
        if not image.startswith(IMAGE_REGISTRY_PREFIX):
            problems.append(f"be from {IMAGE_REGISTRY}")
        if IMAGE_TAG_SEPARATOR not in image:
            problems.append("contain tag")
        if problems:
            violations.append(
                Violation(
                    f"{prefix}.image", f"{base_path}/image", INVALID_VALUE,
                    f"{prefix}.image must {' and '.join(problems)}", index,
                )
            )

    # ports
    if container.port is not None:
        violations.extend(
            _check_port_number(
                container.port.container_port,
                field=f"{prefix}.ports.containerPort",
                yaml_path=f"{base_path}/ports/containerPort",
                index=index,
            )
        )
        protocol = container.port.protocol
        if protocol and protocol not in PROTOCOLS:
            violations.append(
                Violation(
                    f"{prefix}.ports.protocol", f"{base_path}/ports/protocol", INVALID_VALUE,
                    f"{prefix}.ports.protocol must be TCP or UDP", index,
                )
            )

    # probes
    if container.readiness_probe is not None:
        violations.extend(validate_probe(container.readiness_probe, index, "readinessProbe"))
    if container.liveness_probe is not None:
        violations.extend(validate_probe(container.liveness_probe, index, "livenessProbe"))

    violations.extend(validate_resources(container.resources, index))
    return violations


def validate_pod(document: Document) -> List[Violation]:
    """Evaluate every rule against ``document`` and return all violations in order.

    Never raises for absent optional fields and never stops early: every
    container and every field is checked regardless of earlier failures.
    """
    violations = _check_top_level(document)
    for index, container in enumerate(document.spec.containers or ()):
        violations.extend(validate_container(container, index))
    return violations
