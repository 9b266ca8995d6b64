"""Configuration models and loaders for the starter project."""

from __future__ import annotations

import pulumi
from pydantic import BaseModel, Field, model_validator

from pulumi_eks_cluster import eks
from pulumi_eks_cluster.eks import config as eks_config


class NodeGroupSettings(BaseModel):
    desired_size: int = eks_config.DEFAULT_NODE_DESIRED_SIZE
    min_size: int = eks_config.DEFAULT_NODE_MIN_SIZE
    max_size: int = eks_config.DEFAULT_NODE_MAX_SIZE
    disk_size: int = eks_config.DEFAULT_NODE_DISK_SIZE
    instance_types: list[str] = Field(
        default_factory=lambda: list(eks_config.DEFAULT_NODE_INSTANCE_TYPES)
    )
    ami_type: str = eks_config.DEFAULT_AMI_TYPE

    @property
    def eks_node_group(self) -> eks.NodeGroupConfig:
        return eks.NodeGroupConfig.from_dict(self.model_dump())


class ProjectConfig(BaseModel):
    cluster_name: str
    env_name: str
    vpc_id: str
    cluster_subnet_ids: list[str]
    nodegroup_subnet_ids: list[str]
    kubernetes_version: str = eks_config.DEFAULT_KUBERNETES_VERSION
    endpoint_access: eks_config.EndpointAccess = eks_config.DEFAULT_ENDPOINT_ACCESS
    node_group: NodeGroupSettings = Field(default_factory=NodeGroupSettings)
    tags: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_subnets(self):
        if not self.cluster_subnet_ids:
            raise ValueError("cluster_subnet_ids must contain at least one subnet")
        if not self.nodegroup_subnet_ids:
            raise ValueError("nodegroup_subnet_ids must contain at least one subnet")
        return self


def load_project_config(pulumi_config: pulumi.Config) -> ProjectConfig:
    """Load and validate project configuration."""
    return ProjectConfig(
        cluster_name=pulumi_config.get("cluster_name")
        or f"{pulumi.get_project()}-{pulumi.get_stack()}",
        env_name=pulumi_config.get("env_name") or pulumi.get_stack(),
        vpc_id=pulumi_config.require("vpc_id"),
        cluster_subnet_ids=pulumi_config.require_object("cluster_subnet_ids"),
        nodegroup_subnet_ids=pulumi_config.require_object("nodegroup_subnet_ids"),
        kubernetes_version=pulumi_config.get("kubernetes_version")
        or eks_config.DEFAULT_KUBERNETES_VERSION,
        endpoint_access=pulumi_config.get("endpoint_access")
        or eks_config.DEFAULT_ENDPOINT_ACCESS,
        node_group=pulumi_config.get_object("node_group") or {},
        tags=pulumi_config.get_object("tags") or {},
    )
