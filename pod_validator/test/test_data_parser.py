"""Tests for decoding parsed YAML into the pod model."""

import datetime

import pytest

from pod_validator.exceptions import DecodeError
from pod_validator.models import Container, Document, IntegerValue, Metadata, Spec
from pod_validator.models.parsing.data_parser import decode_document, load_document, load_document_with_source
from pod_validator.utils.numeric import normalize_integer, scalar_text

from conftest import VALID_POD_YAML


class TestNormalizeInteger:
    @pytest.mark.parametrize("value, expected", [
        (8080, 8080),
        (2 ** 40, 2 ** 40),
        (8080.0, 8080),
        (-1, -1),
    ])
    def test_integral_values(self, value, expected):
        assert normalize_integer(value) == expected

    @pytest.mark.parametrize("value", [True, False, 80.5, "8080", None, [80], {"a": 1}, float("inf"), float("nan")])
    def test_non_integral_values(self, value):
        assert normalize_integer(value) is None

    def test_scalar_text(self):
        assert scalar_text(4) == "4"
        assert scalar_text(True) == "true"
        assert scalar_text(None) == ""
        assert scalar_text(datetime.date(2024, 1, 2)) == "2024-01-02"


class TestDecodeDocument:
    def test_decodes_full_document(self):
        document = load_document(VALID_POD_YAML)

        assert document.api_version == "v1"
        assert document.kind == "Pod"
        assert document.metadata.name == "ok"
        container = document.spec.containers[0]
        assert container.name == "web"
        assert container.port.container_port == IntegerValue(raw=8080, value=8080)
        assert container.port.protocol == "TCP"
        assert container.readiness_probe is None
        assert container.liveness_probe.http_get.path == "/healthz"
        assert container.liveness_probe.http_get.port.value == 8080
        assert dict(container.resources.requests) == {"cpu": "1", "memory": "256Mi"}
        assert container.resources.limits is None

    def test_empty_mapping_decodes_to_absent_fields(self):
        document = decode_document({})

        assert document == Document(metadata=Metadata(), spec=Spec())
        assert document.spec.containers is None
        assert document.spec.os is None

    def test_empty_container_list_is_distinct_from_absent(self):
        document = decode_document({"spec": {"containers": []}})

        assert document.spec.containers == ()

    def test_unknown_fields_are_ignored(self, pod_data):
        pod_data["status"] = {"phase": "Running"}
        pod_data["spec"]["containers"][0]["command"] = ["run"]

        document = decode_document(pod_data)

        assert document.spec.containers[0].name == "web"

    def test_null_nested_objects_are_absent(self):
        document = decode_document({"spec": {"os": None, "containers": [{"ports": None, "livenessProbe": None}]}})

        assert document.spec.os is None
        assert document.spec.containers[0].port is None
        assert document.spec.containers[0].liveness_probe is None

    def test_empty_os_block_is_present(self):
        document = decode_document({"spec": {"os": {}}})

        assert document.spec.os is not None
        assert document.spec.os.name is None

    def test_probe_without_http_get_decodes_empty_action(self):
        document = decode_document({"spec": {"containers": [{"readinessProbe": {}}]}})

        http_get = document.spec.containers[0].readiness_probe.http_get
        assert http_get.path is None
        assert http_get.port is None

    @pytest.mark.parametrize("raw, value", [(8080, 8080), (8080.0, 8080), ("8080", None), (True, None), (80.5, None)])
    def test_port_normalization(self, container_data, pod_data, raw, value):
        container_data["ports"]["containerPort"] = raw

        port = decode_document(pod_data).spec.containers[0].port.container_port

        assert port.raw == raw
        assert port.value == value

    def test_scalars_in_string_fields_become_text(self, container_data, pod_data):
        container_data["resources"]["requests"]["cpu"] = 4
        pod_data["metadata"]["name"] = 123

        document = decode_document(pod_data)

        assert document.metadata.name == "123"
        assert document.spec.containers[0].resources.requests["cpu"] == "4"

    def test_resource_maps_are_read_only(self, pod_data):
        requests = decode_document(pod_data).spec.containers[0].resources.requests

        with pytest.raises(TypeError):
            requests["cpu"] = "2"

    def test_unquoted_date_reads_as_text(self):
        document = load_document("metadata:\n  name: 2024-01-02\n")

        assert document.metadata.name == "2024-01-02"


class TestDecodeErrors:
    def test_root_must_be_mapping(self):
        with pytest.raises(DecodeError) as excinfo:
            load_document("- a\n- b\n")

        assert excinfo.value.yaml_path == "/"

    def test_list_where_mapping_expected(self):
        content = "spec:\n  containers:\n    - name: web\n      ports:\n        - containerPort: 80\n"

        with pytest.raises(DecodeError) as excinfo:
            load_document_with_source(content)

        assert excinfo.value.yaml_path == "/spec/containers/0/ports"
        assert excinfo.value.line == 5

    def test_containers_must_be_sequence(self):
        with pytest.raises(DecodeError) as excinfo:
            decode_document({"spec": {"containers": {"name": "web"}}})

        assert excinfo.value.yaml_path == "/spec/containers"

    def test_mapping_in_string_field(self):
        with pytest.raises(DecodeError) as excinfo:
            decode_document({"metadata": {"name": {"first": "a"}}})

        assert excinfo.value.yaml_path == "/metadata/name"
        assert "Type mismatch" in excinfo.value.reason

    def test_nested_value_in_resource_map(self, pod_data, container_data):
        container_data["resources"]["limits"] = {"cpu": ["1"]}

        with pytest.raises(DecodeError) as excinfo:
            decode_document(pod_data)

        assert excinfo.value.yaml_path == "/spec/containers/0/resources/limits/cpu"

    def test_wrong_typed_port_is_not_a_decode_error(self, pod_data, container_data):
        container_data["ports"]["containerPort"] = {"nested": 1}

        document = decode_document(pod_data)

        assert document.spec.containers[0].port.container_port.value is None

    def test_null_container_entry_decodes_to_empty_container(self):
        document = load_document("spec:\n  containers:\n    -\n")

        assert document.spec.containers == (Container(),)
