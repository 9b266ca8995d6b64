import pulumi
import pulumi_aws as aws

from .config import NodeGroupConfig


class NodeGroup(pulumi.ComponentResource):
    """EKS managed node group as a Pulumi ComponentResource."""

    node_group: aws.eks.NodeGroup
    node_group_name: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        cluster: aws.eks.Cluster,
        cluster_name: str,
        node_role_arn: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        env_name: str,
        config: NodeGroupConfig | None = None,
        depends_on: list[pulumi.Resource] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-cluster:eks:NodeGroup", name, None, opts)

        config = config or NodeGroupConfig()
        node_group_name = f"{cluster_name}-nodegroup"

        self.node_group = aws.eks.NodeGroup(
            f"{name}-ng",
            cluster_name=cluster.name,
            node_group_name=node_group_name,
            node_role_arn=node_role_arn,
            subnet_ids=subnet_ids,
            scaling_config=aws.eks.NodeGroupScalingConfigArgs(
                desired_size=config.desired_size,
                min_size=config.min_size,
                max_size=config.max_size,
            ),
            disk_size=config.disk_size,
            instance_types=config.instance_types,
            ami_type=config.ami_type,
            labels={
                "nodegroup-type": "managed",
                "environment": env_name,
            },
            tags={
                "Environment": env_name,
                "Name": node_group_name,
                f"kubernetes.io/cluster/{cluster_name}": "owned",
            },
            update_config=aws.eks.NodeGroupUpdateConfigArgs(max_unavailable=1),
            opts=pulumi.ResourceOptions(
                parent=self, depends_on=[cluster, *(depends_on or [])]
            ),
        )

        self.node_group_name = self.node_group.node_group_name

        self.register_outputs({"node_group_name": self.node_group_name})
