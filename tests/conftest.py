"""Test configuration and fixtures."""

import json
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from unittest.mock import Mock

import pytest

from k8s_report.k8s.client import K8sClient

POD_LIST = {
    "items": [
        {
            "metadata": {"name": "web-0", "namespace": "default"},
            "spec": {
                "containers": [
                    {
                        "name": "nginx",
                        "resources": {
                            "requests": {"cpu": "100m", "memory": "128Mi"},
                            "limits": {"cpu": "500m", "memory": "256Mi"},
                        },
                    }
                ]
            },
        },
        {
            "metadata": {"name": "coredns-abc", "namespace": "kube-system"},
            "spec": {"containers": [{"name": "coredns", "resources": {}}]},
        },
    ]
}


def make_kubectl(
    outputs: Optional[Dict[str, str]] = None, failures: Iterable[str] = ()
) -> Callable[[List[str]], Tuple[bool, str]]:
    """Build a fake K8sClient.execute keyed by the joined kubectl arguments.

    Keys in ``failures`` and ``outputs`` match by prefix.
    """
    outputs = dict(outputs or {})
    outputs.setdefault("get pods --all-namespaces -o json", json.dumps(POD_LIST))
    failures = list(failures)

    def execute(args: List[str]) -> Tuple[bool, str]:
        command = " ".join(args)
        for prefix in failures:
            if command.startswith(prefix):
                return False, f"error: {command} failed\n"
        for prefix, output in outputs.items():
            if command.startswith(prefix):
                return True, output
        return True, f"output of {command}\n"

    return execute


@pytest.fixture
def kubectl_factory():
    """Factory for fake kubectl execute functions."""
    return make_kubectl


@pytest.fixture
def mock_client():
    """Mock K8sClient answering every query successfully."""
    client = Mock(spec=K8sClient)
    client.kubeconfig = "/tmp/kubeconfig.yaml"
    client.execute = Mock(side_effect=make_kubectl())
    return client


@pytest.fixture
def kubeconfig_file(tmp_path):
    """A minimal kubeconfig on disk."""
    path = tmp_path / "kubeconfig.yaml"
    path.write_text(
        "apiVersion: v1\n"
        "kind: Config\n"
        "clusters:\n"
        "- name: kind-kind-cluster\n"
        "  cluster:\n"
        "    server: https://127.0.0.1:6443\n"
        "contexts: []\n"
        "users: []\n"
    )
    return path


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no KUBECONFIG set."""
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
