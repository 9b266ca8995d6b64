"""EKS cluster components."""

from .cluster import EKSCluster, EksControlPlane
from .config import ClusterConfigError, NodeGroupConfig
from .node_group import NodeGroup

__all__ = [
    "ClusterConfigError",
    "EKSCluster",
    "EksControlPlane",
    "NodeGroup",
    "NodeGroupConfig",
]
