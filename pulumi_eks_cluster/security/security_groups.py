import pulumi
import pulumi_aws as aws


class ClusterSecurityGroup(pulumi.ComponentResource):
    """Security group for communication between the EKS control plane and worker nodes."""

    security_group: aws.ec2.SecurityGroup
    egress_rule: aws.ec2.SecurityGroupRule
    security_group_id: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        vpc_id: pulumi.Input[str],
        cluster_name: str,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-cluster:aws:ClusterSecurityGroup", name, None, opts)

        self.security_group = aws.ec2.SecurityGroup(
            f"{name}-sg",
            vpc_id=vpc_id,
            description=f"EKS cluster communication with worker nodes for {cluster_name}",
            tags={"Name": f"{cluster_name}-cluster-sg"},
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.egress_rule = aws.ec2.SecurityGroupRule(
            f"{name}-egress-all",
            type="egress",
            from_port=0,
            to_port=0,
            protocol="-1",
            cidr_blocks=["0.0.0.0/0"],
            security_group_id=self.security_group.id,
            description="Allow all outbound traffic",
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.security_group_id = self.security_group.id

        self.register_outputs({"security_group_id": self.security_group_id})
