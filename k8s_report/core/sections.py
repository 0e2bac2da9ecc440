"""Report section catalogue."""

import json
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..k8s.metrics import METRICS_SERVER_MANIFEST
from ..utils.text import format_columns, grep_with_context, head

COMPUTE_GROUP = "Compute Resources"
STORAGE_GROUP = "Storage Information"
MANAGEMENT_GROUP = "Additional Resource Management Information"

NODE_CAPACITY_PATTERN = r"(Name:|Capacity:|Allocatable:)"
NODE_CAPACITY_CONTEXT = 10
POD_RESOURCES_LIMIT = 20
API_RESOURCES_LIMIT = 20

METRICS_UNAVAILABLE = "Metrics server not available"


@dataclass
class SectionSpec:
    """One read-only cluster query and how to present its output."""

    key: str
    title: str
    plain_title: str
    args: List[str]
    level: int = 2
    group: Optional[str] = None
    plain_group: Optional[str] = None
    fallback: Optional[str] = None
    transform: Optional[Callable[[str], str]] = None
    footer: Optional[str] = None

    def fallback_message(self) -> str:
        """Text shown in place of the output when the query fails."""
        return self.fallback or f"Unable to retrieve {self.title.split('. ', 1)[-1].lower()}"

    @property
    def command(self) -> str:
        """The kubectl command line, for display."""
        return " ".join(["kubectl"] + self.args)


def node_capacity(output: str) -> str:
    """Keep the name, capacity and allocatable blocks of ``kubectl describe nodes``."""
    return grep_with_context(output, NODE_CAPACITY_PATTERN, NODE_CAPACITY_CONTEXT)


def _joined(containers: List[dict], kind: str, resource: str) -> str:
    values = []
    for container in containers:
        value = ((container.get("resources") or {}).get(kind) or {}).get(resource)
        if value:
            values.append(str(value))
    return " ".join(values)


def pod_resources(output: str) -> str:
    """Tabulate container requests and limits per pod from ``kubectl get pods -o json``."""
    data = json.loads(output)
    if not isinstance(data, dict):
        raise ValueError("expected a pod list object")

    rows = [["NAMESPACE", "NAME", "CPU_REQUEST", "MEMORY_REQUEST", "CPU_LIMIT", "MEMORY_LIMIT"]]
    for pod in data.get("items", [])[:POD_RESOURCES_LIMIT]:
        metadata = pod.get("metadata", {})
        containers = (pod.get("spec") or {}).get("containers", [])
        rows.append(
            [
                metadata.get("namespace", ""),
                metadata.get("name", ""),
                _joined(containers, "requests", "cpu"),
                _joined(containers, "requests", "memory"),
                _joined(containers, "limits", "cpu"),
                _joined(containers, "limits", "memory"),
            ]
        )

    return format_columns(rows)


def api_resources(output: str) -> str:
    """First entries of the namespaced API resource list."""
    return head(output, API_RESOURCES_LIMIT)


REPORT_SECTIONS: List[SectionSpec] = [
    SectionSpec("cluster-info", "1. Cluster Information", "1. Cluster Info:", ["cluster-info"]),
    SectionSpec("nodes", "2. Nodes", "2. Nodes:", ["get", "nodes", "-o", "wide"]),
    SectionSpec("namespaces", "3. Namespaces", "3. Namespaces:", ["get", "namespaces"]),
    SectionSpec(
        "pods", "4. All Pods", "4. All Pods:", ["get", "pods", "--all-namespaces", "-o", "wide"]
    ),
    SectionSpec("services", "5. Services", "5. Services:", ["get", "services", "--all-namespaces"]),
    SectionSpec(
        "deployments", "6. Deployments", "6. Deployments:", ["get", "deployments", "--all-namespaces"]
    ),
    SectionSpec("storage-classes", "7. Storage Classes", "7. Storage Classes:", ["get", "storageclass"]),
    SectionSpec("persistent-volumes", "8. Persistent Volumes", "8. Persistent Volumes:", ["get", "pv"]),
    SectionSpec(
        "configmaps", "9. ConfigMaps", "9. ConfigMaps:", ["get", "configmaps", "--all-namespaces"]
    ),
    SectionSpec("secrets", "10. Secrets", "10. Secrets:", ["get", "secrets", "--all-namespaces"]),
    SectionSpec(
        "node-usage",
        "Resource Summary",
        "=== Quick Resource Summary ===",
        ["top", "nodes"],
        fallback=METRICS_UNAVAILABLE,
    ),
    SectionSpec(
        "node-capacity",
        "Node Capacity and Allocatable Resources",
        "Node Resource Capacity and Allocatable:",
        ["describe", "nodes"],
        level=3,
        group=COMPUTE_GROUP,
        plain_group="=== Compute Resources ===",
        transform=node_capacity,
    ),
    SectionSpec(
        "pod-resources",
        "Resource Requests and Limits by Pod",
        "Resource Requests and Limits by Namespace:",
        ["get", "pods", "--all-namespaces", "-o", "json"],
        level=3,
        group=COMPUTE_GROUP,
        plain_group="=== Compute Resources ===",
        transform=pod_resources,
    ),
    SectionSpec(
        "pod-usage",
        "Current Resource Usage",
        "Node Resource Usage (if metrics-server is available):",
        ["top", "pods", "--all-namespaces"],
        level=3,
        group=COMPUTE_GROUP,
        plain_group="=== Compute Resources ===",
        fallback=f"{METRICS_UNAVAILABLE} - install with: kubectl apply -f {METRICS_SERVER_MANIFEST}",
    ),
    SectionSpec(
        "pvcs",
        "Persistent Volume Claims",
        "Persistent Volume Claims:",
        ["get", "pvc", "--all-namespaces"],
        level=3,
        group=STORAGE_GROUP,
    ),
    SectionSpec(
        "storage-usage",
        "Storage Usage",
        "Storage Usage:",
        [
            "get",
            "pv",
            "-o",
            "custom-columns=NAME:.metadata.name,CAPACITY:.spec.capacity.storage,"
            "ACCESS:.spec.accessModes,STATUS:.status.phase,CLAIM:.spec.claimRef.name",
        ],
        level=3,
        group=STORAGE_GROUP,
    ),
    SectionSpec(
        "resource-quotas",
        "Resource Quotas",
        "Resource Quotas:",
        ["get", "resourcequota", "--all-namespaces"],
        level=3,
        group=MANAGEMENT_GROUP,
        plain_group="=== Additional Resource Management ===",
    ),
    SectionSpec(
        "limit-ranges",
        "Limit Ranges",
        "Limit Ranges:",
        ["get", "limitrange", "--all-namespaces"],
        level=3,
        group=MANAGEMENT_GROUP,
        plain_group="=== Additional Resource Management ===",
    ),
    SectionSpec(
        "network-policies",
        "Network Policies",
        "Network Policies:",
        ["get", "networkpolicies", "--all-namespaces"],
        level=3,
        group=MANAGEMENT_GROUP,
        plain_group="=== Additional Resource Management ===",
    ),
    SectionSpec(
        "ingresses",
        "Ingress Controllers",
        "Ingress Controllers:",
        ["get", "ingress", "--all-namespaces"],
        level=3,
        group=MANAGEMENT_GROUP,
        plain_group="=== Additional Resource Management ===",
    ),
    SectionSpec(
        "api-resources",
        "Available API Resources",
        "=== Available API Resources ===",
        ["api-resources", "--verbs=list", "--namespaced", "-o", "name"],
        transform=api_resources,
        footer="... (run 'kubectl api-resources' for full list)",
    ),
]

USEFUL_COMMANDS: List[str] = [
    "# Monitor resource usage in real-time",
    "watch kubectl top pods --all-namespaces",
    "",
    "# Get detailed resource information for a specific pod",
    "kubectl describe pod <pod-name> -n <namespace>",
    "",
    "# Check events across all namespaces",
    "kubectl get events --all-namespaces --sort-by='.lastTimestamp'",
    "",
    "# Get resource usage by node",
    "kubectl top nodes",
    "",
    "# List all containers and their resource requests/limits",
    "kubectl get pods --all-namespaces -o=jsonpath='{range .items[*]}{.metadata.namespace}{\"/\"}{.metadata.name}{\"\\n\"}{range .spec.containers[*]}{\"  Container: \"}{.name}{\"\\n\"}{\"  CPU Request: \"}{.resources.requests.cpu}{\"\\n\"}{\"  Memory Request: \"}{.resources.requests.memory}{\"\\n\"}{\"  CPU Limit: \"}{.resources.limits.cpu}{\"\\n\"}{\"  Memory Limit: \"}{.resources.limits.memory}{\"\\n\"}{end}{\"\\n\"}{end}'",
    "",
    "# Generate cluster resource report",
    "k8s-report report --markdown --markdown-name k8s_resources_report.md",
]
