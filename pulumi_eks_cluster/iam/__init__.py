"""IAM roles for EKS."""

from .roles import ClusterRole, NodeGroupRole, assume_role_policy

__all__ = [
    "ClusterRole",
    "NodeGroupRole",
    "assume_role_policy",
]
