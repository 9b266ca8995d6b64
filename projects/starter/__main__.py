"""A Python Pulumi program deploying a single EKS cluster with a generated kubeconfig."""

import pulumi

from pulumi_eks_cluster import eks

from config import load_project_config

region = pulumi.Config("aws").require("region")
config = load_project_config(pulumi.Config())

cluster = eks.EKSCluster(
    f"{config.cluster_name}-cls",
    cluster_name=config.cluster_name,
    vpc_id=config.vpc_id,
    cluster_subnet_ids=config.cluster_subnet_ids,
    nodegroup_subnet_ids=config.nodegroup_subnet_ids,
    env_name=config.env_name,
    node_group=config.node_group.eks_node_group,
    kubernetes_version=config.kubernetes_version,
    endpoint_access=config.endpoint_access,
    tags=config.tags,
    region=region,
)

pulumi.export("cluster_name", cluster.cluster_name)
pulumi.export("cluster_endpoint", cluster.cluster_endpoint)
pulumi.export("cluster_security_group_id", cluster.cluster_security_group_id)
pulumi.export("node_group_name", cluster.node_group_name)
pulumi.export("kubeconfig", cluster.kubeconfig)
