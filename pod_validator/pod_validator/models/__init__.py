"""Typed pod model and the structural schema it is decoded against."""

from .pod import (
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

__all__ = [
    "Container",
    "Document",
    "HTTPGetAction",
    "IntegerValue",
    "Metadata",
    "PodOS",
    "PortSpec",
    "Probe",
    "ResourceRequirements",
    "Spec",
]
