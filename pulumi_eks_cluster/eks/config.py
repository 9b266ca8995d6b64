"""Configuration constants and data classes for EKS components."""

import typing
from dataclasses import dataclass, field


# EKS constants
DEFAULT_KUBERNETES_VERSION = "1.33"
DEFAULT_AMI_TYPE = "AL2023_x86_64_STANDARD"

# Node group defaults
DEFAULT_NODE_DISK_SIZE = 20
DEFAULT_NODE_DESIRED_SIZE = 2
DEFAULT_NODE_MIN_SIZE = 1
DEFAULT_NODE_MAX_SIZE = 3
DEFAULT_NODE_INSTANCE_TYPES = ["t3.medium"]

# AWS managed policies for the control plane and the worker nodes
EKS_POLICY_ARNS = {
    "CLUSTER_POLICY": "arn:aws:iam::aws:policy/AmazonEKSClusterPolicy",
    "WORKER_NODE_POLICY": "arn:aws:iam::aws:policy/AmazonEKSWorkerNodePolicy",
    "CNI_POLICY": "arn:aws:iam::aws:policy/AmazonEKS_CNI_Policy",
    "ECR_READ_ONLY": "arn:aws:iam::aws:policy/AmazonEC2ContainerRegistryReadOnly",
}

CLUSTER_POLICIES = [EKS_POLICY_ARNS["CLUSTER_POLICY"]]

EKS_NODE_POLICIES = [
    EKS_POLICY_ARNS["WORKER_NODE_POLICY"],
    EKS_POLICY_ARNS["CNI_POLICY"],
    EKS_POLICY_ARNS["ECR_READ_ONLY"],
]

DEFAULT_TAGS = {"ManagedBy": "pulumi"}

EndpointAccess = typing.Literal["PUBLIC", "PRIVATE", "PUBLIC_AND_PRIVATE"]
DEFAULT_ENDPOINT_ACCESS: EndpointAccess = "PUBLIC_AND_PRIVATE"


class ClusterConfigError(ValueError):
    """Raised when cluster configuration is invalid, before any resource is declared."""


@dataclass
class NodeGroupConfig:
    """Configuration for the managed node group."""

    desired_size: int = DEFAULT_NODE_DESIRED_SIZE
    min_size: int = DEFAULT_NODE_MIN_SIZE
    max_size: int = DEFAULT_NODE_MAX_SIZE
    disk_size: int = DEFAULT_NODE_DISK_SIZE
    instance_types: list[str] = field(
        default_factory=lambda: list(DEFAULT_NODE_INSTANCE_TYPES)
    )
    ami_type: str = DEFAULT_AMI_TYPE

    def validate(self) -> None:
        """Check scaling bounds and instance settings.

        Raises:
            ClusterConfigError: if the configuration cannot produce a valid node group.
        """
        if self.min_size < 0:
            raise ClusterConfigError(
                f"Node group min_size must be >= 0, got {self.min_size}"
            )
        if self.max_size < 1:
            raise ClusterConfigError(
                f"Node group max_size must be >= 1, got {self.max_size}"
            )
        if not self.min_size <= self.desired_size <= self.max_size:
            raise ClusterConfigError(
                "Node group sizes must satisfy min_size <= desired_size <= max_size, "
                f"got {self.min_size} <= {self.desired_size} <= {self.max_size}"
            )
        if self.disk_size <= 0:
            raise ClusterConfigError(
                f"Node group disk_size must be positive, got {self.disk_size}"
            )
        if not self.instance_types:
            raise ClusterConfigError("At least one node instance type is required")

    @classmethod
    def from_dict(cls, data: dict) -> "NodeGroupConfig":
        """Create a NodeGroupConfig from a JSON/dict payload."""
        return cls(
            desired_size=data.get("desired_size", DEFAULT_NODE_DESIRED_SIZE),
            min_size=data.get("min_size", DEFAULT_NODE_MIN_SIZE),
            max_size=data.get("max_size", DEFAULT_NODE_MAX_SIZE),
            disk_size=data.get("disk_size", DEFAULT_NODE_DISK_SIZE),
            instance_types=list(
                data.get("instance_types", DEFAULT_NODE_INSTANCE_TYPES)
            ),
            ami_type=data.get("ami_type", DEFAULT_AMI_TYPE),
        )
