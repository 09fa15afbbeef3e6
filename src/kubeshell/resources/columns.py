#!/usr/bin/env python3
"""
KUBESHELL COLUMN CATALOG
------------------------
Per-kind list configuration, expressed purely as data: the default
columns, which sort flags map to which column, the optional columns a
user can switch on, and the extractors for every non built-in column.

Author: KubeShell Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from kubeshell.core.models import Extractor, ObjectHandle, Resource
from kubeshell.core.values import metadata, pointer, val_str_opt
from kubeshell.listing.projection import ListRequest
from kubeshell.listing.rows import HandleBuilder


def handle_builder(kind: str) -> HandleBuilder:
    def build(resource: Resource) -> ObjectHandle:
        meta = metadata(resource)
        return ObjectHandle(kind=kind, name=meta.get("name") or "", namespace=meta.get("namespace"))
    return build


def _count(value: Any) -> Optional[str]:
    if isinstance(value, (dict, list)):
        return str(len(value))
    return None


def _int_str(path: str):
    def extract(resource: Resource) -> Optional[str]:
        value = pointer(resource, path)
        return str(value) if isinstance(value, int) and not isinstance(value, bool) else None
    return extract


def _str_at(path: str) -> Extractor:
    return lambda resource: val_str_opt(path, resource)


# --- Pods ---

def pod_ready(pod: Resource) -> Optional[str]:
    statuses = pointer(pod, "/status/containerStatuses")
    if not isinstance(statuses, list):
        return None
    ready = sum(1 for s in statuses if isinstance(s, dict) and s.get("ready"))
    return f"{ready}/{len(statuses)}"


def pod_status(pod: Resource) -> Optional[str]:
    if metadata(pod).get("deletionTimestamp"):
        return "Terminating"
    return val_str_opt("/status/phase", pod)


def pod_restarts(pod: Resource) -> Optional[str]:
    statuses = pointer(pod, "/status/containerStatuses")
    if not isinstance(statuses, list):
        return None
    counts = (s.get("restartCount") for s in statuses if isinstance(s, dict))
    return str(sum(c for c in counts if isinstance(c, int) and not isinstance(c, bool)))


# --- Nodes ---

def node_state(node: Resource) -> Optional[str]:
    conditions = pointer(node, "/status/conditions") or []
    for cond in conditions:
        if isinstance(cond, dict) and cond.get("type") == "Ready":
            state = "Ready" if cond.get("status") == "True" else "Not Ready"
            if pointer(node, "/spec/unschedulable"):
                state += ", SchedulingDisabled"
            return state
    return "Unknown"


# --- Services ---

def service_external_ips(svc: Resource) -> Optional[str]:
    ips = list(pointer(svc, "/spec/externalIPs") or [])
    for ingress in pointer(svc, "/status/loadBalancer/ingress") or []:
        if isinstance(ingress, dict):
            ips.append(ingress.get("ip") or ingress.get("hostname") or "")
    return ", ".join(ip for ip in ips if ip) or "<none>"


def service_ports(svc: Resource) -> Optional[str]:
    ports = pointer(svc, "/spec/ports")
    if not isinstance(ports, list):
        return None
    rendered = []
    for port in ports:
        if not isinstance(port, dict):
            continue
        text = f"{port.get('port')}"
        if port.get("nodePort"):
            text += f":{port['nodePort']}"
        rendered.append(f"{text}/{port.get('protocol', 'TCP')}")
    return ",".join(rendered)


@dataclass
class ListSpec:
    """How one resource kind is listed."""
    kind: str
    cols: List[str]
    col_map: Dict[str, str]
    extra_col_map: Optional[Dict[str, str]] = None
    extractors: Dict[str, Extractor] = field(default_factory=dict)

    def sort_keys(self) -> List[str]:
        """Every key `--sort` accepts for this kind."""
        return sorted({"age"} | set(self.col_map) | set(self.extra_col_map or {}))

    def request(self, sort_key: Optional[str] = None, reverse: bool = False,
                pattern: Optional[str] = None, show: Optional[List[str]] = None,
                labels: bool = False) -> ListRequest:
        return ListRequest(
            cols=list(self.cols),
            get_handle=handle_builder(self.kind),
            col_map=self.col_map,
            extra_col_map=self.extra_col_map,
            extractors=self.extractors,
            sort_key=sort_key,
            reverse=reverse,
            pattern=pattern,
            show=list(show or []),
            labels=labels,
        )


PODS = ListSpec(
    kind="Pod",
    cols=["Name", "Ready", "Phase", "Age", "Restarts"],
    col_map={"name": "Name", "ready": "Ready", "phase": "Phase", "restarts": "Restarts"},
    extra_col_map={"ip": "IP", "namespace": "Namespace", "node": "Node"},
    extractors={
        "Ready": pod_ready,
        "Phase": pod_status,
        "Restarts": pod_restarts,
        "IP": _str_at("/status/podIP"),
        "Node": _str_at("/spec/nodeName"),
    },
)

NODES = ListSpec(
    kind="Node",
    cols=["Name", "State", "Age"],
    col_map={"name": "Name", "state": "State"},
    extra_col_map={"version": "Version"},
    extractors={
        "State": node_state,
        "Version": _str_at("/status/nodeInfo/kubeletVersion"),
    },
)

DEPLOYMENTS = ListSpec(
    kind="Deployment",
    cols=["Name", "Desired", "Current", "Up To Date", "Available", "Age"],
    col_map={
        "name": "Name", "desired": "Desired", "current": "Current",
        "uptodate": "Up To Date", "available": "Available",
    },
    extra_col_map={"namespace": "Namespace"},
    extractors={
        "Desired": _int_str("/spec/replicas"),
        "Current": _int_str("/status/replicas"),
        "Up To Date": _int_str("/status/updatedReplicas"),
        "Available": _int_str("/status/availableReplicas"),
    },
)

SERVICES = ListSpec(
    kind="Service",
    cols=["Name", "ClusterIP", "External IPs", "Port(s)", "Age"],
    col_map={"name": "Name", "clusterip": "ClusterIP", "externalips": "External IPs", "ports": "Port(s)"},
    extra_col_map={"namespace": "Namespace"},
    extractors={
        "ClusterIP": _str_at("/spec/clusterIP"),
        "External IPs": service_external_ips,
        "Port(s)": service_ports,
    },
)

CONFIGMAPS = ListSpec(
    kind="ConfigMap",
    cols=["Name", "Data", "Age"],
    col_map={"name": "Name", "data": "Data"},
    extra_col_map={"namespace": "Namespace"},
    extractors={"Data": lambda cm: _count(cm.get("data") or {})},
)

SECRETS = ListSpec(
    kind="Secret",
    cols=["Name", "Type", "Data", "Age"],
    col_map={"name": "Name", "type": "Type", "data": "Data"},
    extra_col_map={"namespace": "Namespace"},
    extractors={
        "Type": _str_at("/type"),
        "Data": lambda secret: _count(secret.get("data") or {}),
    },
)

LIST_SPECS: Dict[str, ListSpec] = {}
for _spec, _aliases in (
    (PODS, ("pods", "pod", "po")),
    (NODES, ("nodes", "node", "no")),
    (DEPLOYMENTS, ("deployments", "deployment", "deploy")),
    (SERVICES, ("services", "service", "svc")),
    (CONFIGMAPS, ("configmaps", "configmap", "cm")),
    (SECRETS, ("secrets", "secret")),
):
    for _alias in _aliases:
        LIST_SPECS[_alias] = _spec


def list_spec_for(kind: str) -> Optional[ListSpec]:
    return LIST_SPECS.get(kind.lower())
