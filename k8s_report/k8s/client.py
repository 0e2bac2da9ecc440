"""Kubernetes client wrapper."""

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..utils.logger import get_logger

logger = get_logger(__name__)


class K8sClient:
    """Wrapper for kubectl commands bound to one kubeconfig."""

    def __init__(self, kubeconfig: Optional[Union[str, Path]] = None):
        self.kubeconfig = str(kubeconfig) if kubeconfig else None
        self._verify_kubectl()

    def _verify_kubectl(self):
        """Verify kubectl is available."""
        try:
            subprocess.run(
                ["kubectl", "version", "--client", "-o", "json"],
                capture_output=True,
                text=True,
                check=True,
            )
            logger.debug("kubectl verified successfully")
        except FileNotFoundError:
            raise RuntimeError("kubectl command not found. Please install kubectl.")
        except subprocess.CalledProcessError:
            logger.warning("kubectl verification failed")

    def _build_command(self, args: List[str]) -> List[str]:
        """Build kubectl command with the kubeconfig flag."""
        cmd = ["kubectl"]

        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])

        cmd.extend(args)
        return cmd

    def execute(self, args: List[str]) -> Tuple[bool, str]:
        """Execute kubectl command and return success status and output."""
        cmd = self._build_command(args)
        logger.debug(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return True, result.stdout
        except subprocess.CalledProcessError as e:
            logger.debug(f"Command failed: {e.stderr}")
            return False, e.stderr or ""

    def resource_exists(self, resource_type: str, name: str, namespace: str) -> bool:
        """Check whether a named resource exists in a namespace."""
        success, _ = self.execute(["get", resource_type, name, "-n", namespace])
        return success
