#!/usr/bin/env python3
"""
KUBESHELL DESCRIBE CATALOG
--------------------------
The describe layout of each supported kind, as (title, descriptor) lists,
plus the custom transforms some of those layouts need.

Author: KubeShell Team
Date: 2026-10-19
"""

from typing import Any, Dict, List, Optional, Tuple

from kubeshell.core.values import pointer, val_str, val_str_opt
from kubeshell.describe.evaluator import (
    CreatedTimestamp, Custom, FieldDescriptor, KeyValueDump,
    MetadataPathString, PathString, PathUint,
)

Layout = List[Tuple[str, FieldDescriptor]]


# --- Custom transforms ---

def pod_phase(pod: Any) -> str:
    return val_str("/status/phase", pod, "<No Phase>")


def volume_summary(volumes: Any) -> str:
    lines = []
    for vol in volumes if isinstance(volumes, list) else []:
        if not isinstance(vol, dict):
            continue
        lines.append(f"  Name: {val_str('/name', vol, '<No Name>')}")
        if "emptyDir" in vol:
            lines.append("    Type:\tEmptyDir (a temporary directory that shares a pod's lifetime)")
        if "configMap" in vol:
            lines.append("    Type:\tConfigMap (a volume populated by a ConfigMap)")
            lines.append(f"    Name:\t{val_str('/configMap/name', vol, '<No Name>')}")
        if "secret" in vol:
            lines.append("    Type:\tSecret (a volume populated by a Secret)")
            lines.append(f"    SecretName:\t{val_str('/secret/secretName', vol, '<No SecretName>')}")
        if "persistentVolumeClaim" in vol:
            lines.append("    Type:\tPersistentVolumeClaim (a reference to a claim in the same namespace)")
            lines.append(f"    ClaimName:\t{val_str('/persistentVolumeClaim/claimName', vol, '<No ClaimName>')}")
        aws = vol.get("awsElasticBlockStore")
        if isinstance(aws, dict):
            partition = aws.get("partition")
            lines.append("    Type:\tAWS Block Store (An AWS Disk resource exposed to the pod)")
            lines.append(f"    VolumeId:\t{val_str('/volumeID', aws, '<No VolumeID>')}")
            lines.append(f"    FSType:\t{val_str('/fsType', aws, '<No FsType>')}")
            lines.append(f"    Partition#:\t{partition if isinstance(partition, int) else 0}")
            lines.append(f"    Read-Only:\t{'True' if aws.get('readOnly') is True else 'False'}")
    return "".join(f"{line}\n" for line in lines)


def container_summary(containers: Any) -> str:
    lines = []
    for container in containers if isinstance(containers, list) else []:
        lines.append(f"  Name: {val_str('/name', container, '<No Name>')}\n")
        lines.append(f"    Image:\t{val_str('/image', container, '<No Image>')}\n")
    return "".join(lines)


def condition_messages(conditions: Any) -> str:
    lines = []
    for condition in conditions if isinstance(conditions, list) else []:
        lines.append(f"  Message: {val_str('/message', condition, '<No Message>')}\n")
    return "".join(lines)


def node_access_url(node: Any) -> str:
    """Builds the public EC2 hostname for AWS nodes from their external IP."""
    provider = val_str_opt("/spec/providerID", node)
    if not provider or not provider.startswith("aws://"):
        return "N/A"

    external_ip: Optional[str] = None
    for address in pointer(node, "/status/addresses") or []:
        if isinstance(address, dict) and address.get("type") == "ExternalIP":
            external_ip = val_str_opt("/address", address)
            break
    if external_ip is None:
        return "Not Found"

    octets = external_ip.split(".")
    if len(octets) < 4:
        return f"Unexpected ip format: {external_ip}"
    # Region comes from the provider id: aws:///us-west-2a/i-0123
    zone = provider[len("aws://"):].strip("/").split("/")[0]
    region = zone[:-1] if zone and zone[-1].isalpha() else "us-west-2"
    return f"ec2-{'-'.join(octets[:4])}.{region}.compute.amazonaws.com ({external_ip})"


def service_ports(ports: Any) -> str:
    lines = []
    for port in ports if isinstance(ports, list) else []:
        if not isinstance(port, dict):
            continue
        name = port.get("name") or "<unset>"
        lines.append(f"  {name}\t{port.get('port')}/{port.get('protocol', 'TCP')}"
                     f" -> {port.get('targetPort', port.get('port'))}\n")
    return "".join(lines)


# --- Layouts ---

_COMMON_META: Layout = [
    ("Name:", MetadataPathString("/name", "<No Name>")),
    ("Namespace:", MetadataPathString("/namespace", "<No Name>")),
]

POD: Layout = _COMMON_META + [
    ("Node:", PathString("/spec/nodeName", "<No NodeName>")),
    ("IP:", PathString("/status/podIP", "<No PodIP>")),
    ("Created at:", CreatedTimestamp()),
    ("Status:", Custom(pod_phase, default="<No Phase>")),
    ("Labels:", KeyValueDump("/metadata/labels")),
    ("Annotations:", KeyValueDump("/metadata/annotations")),
    ("Volumes:", Custom(volume_summary, path="/spec/volumes", default="<No Volumes>")),
]

NODE: Layout = [
    ("Name:", MetadataPathString("/name", "<No Name>")),
    ("Labels:", KeyValueDump("/metadata/labels")),
    ("Annotations:", KeyValueDump("/metadata/annotations")),
    ("Created at:", CreatedTimestamp()),
    ("Provider Id:", PathString("/spec/providerID", "<No Provider Id>")),
    ("External URL:", Custom(node_access_url, default="<N/A>")),
    ("System Info:", KeyValueDump("/status/nodeInfo")),
]

SECRET: Layout = _COMMON_META + [
    ("Labels:", KeyValueDump("/metadata/labels")),
    ("Annotations:", KeyValueDump("/metadata/annotations")),
    ("Type:", PathString("/type", "<No Type>")),
    ("Data:", KeyValueDump("/data", secret=True)),
]

DEPLOYMENT: Layout = _COMMON_META + [
    ("Created at:", CreatedTimestamp()),
    ("Generation:", PathUint("/metadata/generation")),
    ("Labels:", KeyValueDump("/metadata/labels")),
    ("Desired Replicas:", PathUint("/spec/replicas")),
    ("Current Replicas:", PathUint("/status/replicas")),
    ("Up To Date Replicas:", PathUint("/status/updatedReplicas")),
    ("Available Replicas:", PathUint("/status/availableReplicas")),
    ("Containers:", Custom(container_summary, path="/spec/template/spec/containers", default="<No Containers>")),
    ("Messages:", Custom(condition_messages, path="/status/conditions", default="<No Messages>")),
]

CONFIGMAP: Layout = _COMMON_META + [
    ("Created at:", CreatedTimestamp()),
    ("Labels:", KeyValueDump("/metadata/labels")),
    ("Annotations:", KeyValueDump("/metadata/annotations")),
    ("Data:", KeyValueDump("/data")),
]

SERVICE: Layout = _COMMON_META + [
    ("Created at:", CreatedTimestamp()),
    ("Labels:", KeyValueDump("/metadata/labels")),
    ("Selector:", KeyValueDump("/spec/selector")),
    ("Type:", PathString("/spec/type", "<No Type>")),
    ("Cluster IP:", PathString("/spec/clusterIP", "<None>")),
    ("Ports:", Custom(service_ports, path="/spec/ports", default="<No Ports>")),
]

LAYOUTS: Dict[str, Layout] = {
    "Pod": POD,
    "Node": NODE,
    "Secret": SECRET,
    "Deployment": DEPLOYMENT,
    "ConfigMap": CONFIGMAP,
    "Service": SERVICE,
}


def layout_for(kind: str) -> Optional[Layout]:
    return LAYOUTS.get(kind)
