"""Security groups for EKS."""

from .security_groups import ClusterSecurityGroup

__all__ = ["ClusterSecurityGroup"]
