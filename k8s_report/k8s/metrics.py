"""Metrics server installation."""

import json

from ..utils.logger import get_logger
from .client import K8sClient

logger = get_logger(__name__)

METRICS_SERVER_MANIFEST = (
    "https://github.com/kubernetes-sigs/metrics-server/releases/latest/download/components.yaml"
)
METRICS_SERVER_NAMESPACE = "kube-system"
METRICS_SERVER_DEPLOYMENT = "metrics-server"
METRICS_SERVER_TIMEOUT = "120s"

# kind and other local clusters serve kubelet certificates metrics-server cannot verify
INSECURE_TLS_PATCH = [
    {
        "op": "add",
        "path": "/spec/template/spec/containers/0/args/-",
        "value": "--kubelet-insecure-tls",
    }
]


class MetricsServerInstaller:
    """Installs metrics-server so usage sections have data."""

    def __init__(
        self,
        client: K8sClient,
        manifest: str = METRICS_SERVER_MANIFEST,
        timeout: str = METRICS_SERVER_TIMEOUT,
    ):
        self.client = client
        self.manifest = manifest
        self.timeout = timeout

    def is_installed(self) -> bool:
        """Check whether the metrics-server deployment exists."""
        return self.client.resource_exists(
            "deployment", METRICS_SERVER_DEPLOYMENT, METRICS_SERVER_NAMESPACE
        )

    def ensure_installed(self) -> bool:
        """Install metrics-server if absent and wait for it to become available.

        Every step is best-effort: a failure is logged and reported through the
        return value, never raised.
        """
        logger.info("Checking if metrics server is installed")
        if self.is_installed():
            logger.info("Metrics server is already installed")
            return True

        logger.info("Installing metrics server")
        success, output = self.client.execute(["apply", "-f", self.manifest])
        if not success:
            logger.warning(f"Failed to install metrics server: {output.strip()}")
            return False

        logger.info("Patching metrics server for insecure kubelet TLS")
        success, output = self.client.execute(
            [
                "patch",
                "deployment",
                METRICS_SERVER_DEPLOYMENT,
                "-n",
                METRICS_SERVER_NAMESPACE,
                "--type=json",
                f"-p={json.dumps(INSECURE_TLS_PATCH)}",
            ]
        )
        if not success:
            logger.warning(f"Failed to patch metrics server: {output.strip()}")

        logger.info(f"Waiting up to {self.timeout} for metrics server to be ready")
        success, output = self.client.execute(
            [
                "wait",
                "--for=condition=available",
                f"--timeout={self.timeout}",
                f"deployment/{METRICS_SERVER_DEPLOYMENT}",
                "-n",
                METRICS_SERVER_NAMESPACE,
            ]
        )
        if not success:
            logger.warning(f"Metrics server did not become ready: {output.strip()}")
            return False

        return True
