"""Shared fixtures for pod validator tests."""

import copy

import pytest

VALID_POD_YAML = """\
apiVersion: v1
kind: Pod
metadata:
  name: ok
spec:
  containers:
    - name: web
      image: registry.bigbrother.io/app:1.0
      ports:
        containerPort: 8080
        protocol: TCP
      livenessProbe:
        httpGet:
          path: /healthz
          port: 8080
      resources:
        requests:
          cpu: "1"
          memory: "256Mi"
"""

VALID_POD = {
    "apiVersion": "v1",
    "kind": "Pod",
    "metadata": {"name": "ok"},
    "spec": {
        "containers": [
            {
                "name": "web",
                "image": "registry.bigbrother.io/app:1.0",
                "ports": {"containerPort": 8080, "protocol": "TCP"},
                "livenessProbe": {"httpGet": {"path": "/healthz", "port": 8080}},
                "resources": {"requests": {"cpu": "1", "memory": "256Mi"}},
            }
        ]
    },
}


@pytest.fixture
def pod_data():
    """A fresh, mutable copy of a document that passes every rule."""
    return copy.deepcopy(VALID_POD)


@pytest.fixture
def container_data(pod_data):
    return pod_data["spec"]["containers"][0]


@pytest.fixture
def write_yaml(tmp_path):
    def _write(content, name="pod.yaml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
