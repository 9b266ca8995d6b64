"""EKS cluster components."""

from __future__ import annotations

import typing

import pulumi
import pulumi_aws as aws
import pulumi_kubernetes as k8s

from ..iam import ClusterRole, NodeGroupRole
from ..kubeconfig import KubeConfigGenerator
from ..security import ClusterSecurityGroup
from .config import (
    CLUSTER_POLICIES,
    DEFAULT_ENDPOINT_ACCESS,
    DEFAULT_KUBERNETES_VERSION,
    DEFAULT_TAGS,
    EKS_NODE_POLICIES,
    ClusterConfigError,
    EndpointAccess,
    NodeGroupConfig,
)
from .node_group import NodeGroup

# (public access, private access) for each endpoint access mode
_ENDPOINT_ACCESS_FLAGS: dict[str, tuple[bool, bool]] = {
    "PUBLIC": (True, False),
    "PRIVATE": (False, True),
    "PUBLIC_AND_PRIVATE": (True, True),
}


def cluster_tags(
    cluster_name: str, env_name: str, tags: typing.Mapping[str, str] | None = None
) -> dict[str, str]:
    """Tags applied to the control plane. User tags win; empty values are dropped."""
    merged = {
        "Environment": env_name,
        "Name": cluster_name,
        "ManagedBy": "pulumi",
        **(tags or {}),
    }
    return {key: value for key, value in merged.items() if value}


class EksControlPlane(pulumi.ComponentResource):
    """EKS control plane as a Pulumi ComponentResource."""

    cluster: aws.eks.Cluster

    def __init__(
        self,
        name: str,
        cluster_name: str,
        role_arn: pulumi.Input[str],
        security_group_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        env_name: str,
        version: str = DEFAULT_KUBERNETES_VERSION,
        endpoint_access: EndpointAccess = DEFAULT_ENDPOINT_ACCESS,
        tags: typing.Mapping[str, str] | None = None,
        depends_on: list[pulumi.Resource] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-cluster:eks:EksControlPlane", name, None, opts)

        public_access, private_access = _ENDPOINT_ACCESS_FLAGS[endpoint_access]

        self.cluster = aws.eks.Cluster(
            f"{name}-eks",
            name=cluster_name,
            role_arn=role_arn,
            version=version,
            vpc_config=aws.eks.ClusterVpcConfigArgs(
                subnet_ids=subnet_ids,
                security_group_ids=[security_group_id],
                endpoint_public_access=public_access,
                endpoint_private_access=private_access,
            ),
            tags=cluster_tags(cluster_name, env_name, tags),
            opts=pulumi.ResourceOptions(parent=self, depends_on=depends_on),
        )

        self.register_outputs(
            {
                "cluster_name": self.cluster.name,
                "cluster_arn": self.cluster.arn,
                "cluster_endpoint": self.cluster.endpoint,
            }
        )


class EKSCluster(pulumi.ComponentResource):
    """EKS cluster with its IAM roles, security group, managed node group and kubeconfig.

    Resources are declared in this order:
        1. Cluster and node IAM roles.
        2. Cluster security group.
        3. EKS control plane.
        4. Managed node group.
        5. Kubeconfig and a Kubernetes provider built from it.

    Configuration is validated before anything is declared; invalid values
    raise ClusterConfigError.
    """

    cluster_name: pulumi.Output[str]
    cluster_arn: pulumi.Output[str]
    cluster_endpoint: pulumi.Output[str]
    cluster_security_group_id: pulumi.Output[str]
    node_group_name: pulumi.Output[str]
    kubeconfig: pulumi.Output[str]
    kubeconfig_json: pulumi.Output[str]
    k8s_provider: k8s.Provider

    def __init__(
        self,
        name: str,
        cluster_name: str,
        vpc_id: pulumi.Input[str],
        cluster_subnet_ids: list[pulumi.Input[str]],
        nodegroup_subnet_ids: list[pulumi.Input[str]],
        env_name: str,
        node_group: NodeGroupConfig | None = None,
        kubernetes_version: str = DEFAULT_KUBERNETES_VERSION,
        endpoint_access: EndpointAccess = DEFAULT_ENDPOINT_ACCESS,
        tags: typing.Mapping[str, str] | None = None,
        region: pulumi.Input[str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        node_group = node_group or NodeGroupConfig()
        _validate(
            cluster_name=cluster_name,
            env_name=env_name,
            cluster_subnet_ids=cluster_subnet_ids,
            nodegroup_subnet_ids=nodegroup_subnet_ids,
            kubernetes_version=kubernetes_version,
            endpoint_access=endpoint_access,
            node_group=node_group,
        )

        super().__init__("pulumi-eks-cluster:eks:EKSCluster", name, None, opts)

        self.name = name

        # 1. IAM roles
        self.cluster_role = ClusterRole(
            f"{name}-cluster-role",
            policy_arns=CLUSTER_POLICIES,
            opts=pulumi.ResourceOptions(parent=self),
        )
        self.node_role = NodeGroupRole(
            f"{name}-node-role",
            policy_arns=EKS_NODE_POLICIES,
            opts=pulumi.ResourceOptions(parent=self),
        )

        # 2. Security group
        self.security_group = ClusterSecurityGroup(
            f"{name}-cluster-sg",
            vpc_id=vpc_id,
            cluster_name=cluster_name,
            opts=pulumi.ResourceOptions(parent=self),
        )

        # 3. Control plane
        self.control_plane = EksControlPlane(
            f"{name}-control-plane",
            cluster_name=cluster_name,
            role_arn=self.cluster_role.role.arn,
            security_group_id=self.security_group.security_group_id,
            subnet_ids=cluster_subnet_ids,
            env_name=env_name,
            version=kubernetes_version,
            endpoint_access=endpoint_access,
            tags={**DEFAULT_TAGS, **(tags or {})},
            depends_on=[self.cluster_role],
            opts=pulumi.ResourceOptions(parent=self),
        )
        self.k8s = self.control_plane.cluster

        # 4. Managed node group
        self.node_group = NodeGroup(
            f"{name}-node-group",
            cluster=self.k8s,
            cluster_name=cluster_name,
            node_role_arn=self.node_role.role.arn,
            subnet_ids=nodegroup_subnet_ids,
            env_name=env_name,
            config=node_group,
            depends_on=[self.node_role],
            opts=pulumi.ResourceOptions(parent=self),
        )

        # 5. Kubeconfig and Kubernetes provider
        self.kubeconfig_generator = KubeConfigGenerator(
            f"{name}-kubeconfig",
            cluster=self.k8s,
            region=region,
            opts=pulumi.ResourceOptions(parent=self),
        )
        self.k8s_provider = k8s.Provider(
            f"{name}-k8s",
            kubeconfig=self.kubeconfig_generator.kubeconfig,
            opts=pulumi.ResourceOptions(
                parent=self, depends_on=[self.node_group]
            ),
        )

        self.cluster_name = self.k8s.name
        self.cluster_arn = self.k8s.arn
        self.cluster_endpoint = self.k8s.endpoint
        self.cluster_security_group_id = self.security_group.security_group_id
        self.node_group_name = self.node_group.node_group_name
        self.kubeconfig = self.kubeconfig_generator.kubeconfig
        self.kubeconfig_json = self.kubeconfig_generator.kubeconfig_json

        self.register_outputs(
            {
                "cluster_name": self.cluster_name,
                "cluster_arn": self.cluster_arn,
                "cluster_endpoint": self.cluster_endpoint,
                "cluster_security_group_id": self.cluster_security_group_id,
                "node_group_name": self.node_group_name,
                "kubeconfig": self.kubeconfig,
                "kubeconfig_json": self.kubeconfig_json,
            }
        )


def _validate(
    cluster_name: str,
    env_name: str,
    cluster_subnet_ids: list,
    nodegroup_subnet_ids: list,
    kubernetes_version: str,
    endpoint_access: str,
    node_group: NodeGroupConfig,
) -> None:
    if not cluster_name:
        raise ClusterConfigError("cluster_name is required")
    if not env_name:
        raise ClusterConfigError("env_name is required")
    if not cluster_subnet_ids:
        raise ClusterConfigError("At least one cluster subnet ID is required")
    if not nodegroup_subnet_ids:
        raise ClusterConfigError("At least one node group subnet ID is required")
    if not kubernetes_version:
        raise ClusterConfigError("kubernetes_version is required")
    if endpoint_access not in _ENDPOINT_ACCESS_FLAGS:
        raise ClusterConfigError(
            f"endpoint_access must be one of {sorted(_ENDPOINT_ACCESS_FLAGS)}, "
            f"got {endpoint_access!r}"
        )
    node_group.validate()
