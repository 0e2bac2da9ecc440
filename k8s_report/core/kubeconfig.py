"""Kubeconfig resolution and discovery."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ..exceptions import KubeconfigError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_KUBECONFIG_FILE = "kubeconfig.yaml"
KUBECONFIG_ENV = "KUBECONFIG"
MAX_SEARCH_RESULTS = 5


def resolve_kubeconfig(
    explicit: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
    cwd: Optional[Path] = None,
) -> Path:
    """Pick the kubeconfig to use.

    Priority is the explicit path, then the KUBECONFIG environment variable,
    then ./kubeconfig.yaml when it exists. Anything else is an error.
    """
    environ = os.environ if environ is None else environ
    cwd = Path.cwd() if cwd is None else Path(cwd)

    if explicit:
        candidate = Path(explicit).expanduser()
    elif environ.get(KUBECONFIG_ENV):
        candidate = Path(environ[KUBECONFIG_ENV]).expanduser()
    elif (cwd / DEFAULT_KUBECONFIG_FILE).is_file():
        candidate = cwd / DEFAULT_KUBECONFIG_FILE
    else:
        raise KubeconfigError(
            "No kubeconfig file found. Set the KUBECONFIG environment variable, "
            f"create ./{DEFAULT_KUBECONFIG_FILE} or use --kubeconfig to specify a valid path"
        )

    if not candidate.is_file():
        raise KubeconfigError(
            f"Kubeconfig file not found: {candidate}. "
            "Use --kubeconfig to specify a valid path"
        )

    logger.debug(f"Using kubeconfig {candidate}")
    return candidate


def kubeconfig_locations(environ: Optional[Dict[str, str]] = None, home: Optional[Path] = None) -> List[Path]:
    """Well-known kubeconfig locations, in search order."""
    environ = os.environ if environ is None else environ
    home = Path.home() if home is None else Path(home)

    locations = [home / ".kube" / "config"]
    if environ.get(KUBECONFIG_ENV):
        locations.append(Path(environ[KUBECONFIG_ENV]))
    locations.extend(
        [
            Path("/etc/kubernetes/admin.conf"),
            Path("/etc/kubernetes/kubelet.conf"),
            home / "kubeconfig",
            home / ".kubeconfig",
        ]
    )
    return locations


def _is_usable(path: Path) -> bool:
    """A usable kubeconfig exists and is not empty."""
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


def search_home(home: Optional[Path] = None, limit: int = MAX_SEARCH_RESULTS) -> List[Path]:
    """Find files with 'kubeconfig' in their name under the home directory."""
    home = Path.home() if home is None else Path(home)
    found = []
    try:
        for path in home.rglob("*kubeconfig*"):
            if path.is_file():
                found.append(path)
                if len(found) >= limit:
                    break
    except OSError as e:
        logger.debug(f"Stopped searching {home}: {e}")
    return found


def find_kubeconfig(environ: Optional[Dict[str, str]] = None, home: Optional[Path] = None) -> Optional[Path]:
    """Return the first usable kubeconfig from well-known locations or a home search."""
    for location in kubeconfig_locations(environ, home):
        if _is_usable(location):
            logger.info(f"Found kubeconfig at {location}")
            return location
        logger.debug(f"Not found or empty: {location}")

    for path in search_home(home):
        if _is_usable(path):
            logger.info(f"Found kubeconfig at {path}")
            return path

    return None


def validate_kubeconfig(path: Path) -> bool:
    """Check that a kubeconfig parses as a YAML mapping."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"YAML syntax check failed for {path}: {e}")
        return False
    return isinstance(data, dict)


def copy_kubeconfig(source: Path, target: Path) -> Path:
    """Copy a kubeconfig to the target path."""
    try:
        shutil.copyfile(source, target)
    except OSError as e:
        raise KubeconfigError(f"Failed to copy kubeconfig file: {e}")
    return target


def check_cluster_access(kubeconfig: Path) -> bool:
    """Probe the cluster API server with a short timeout."""
    try:
        subprocess.run(
            ["kubectl", "--kubeconfig", str(kubeconfig), "cluster-info", "--request-timeout=5s"],
            capture_output=True,
            text=True,
            check=True,
        )
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False
