from __future__ import annotations

import pulumi
import pulumi_aws as aws

from pulumi_eks_cluster import security
from tests.integration.conftest import localstack_provider, pulumi_stack_factory


def _security_group_program() -> None:
    provider = localstack_provider()
    cluster_name = pulumi.Config("tests").require("clusterName")

    vpc = aws.ec2.Vpc(
        "vpc",
        cidr_block="10.20.0.0/16",
        opts=pulumi.ResourceOptions(provider=provider),
    )
    security_group = security.ClusterSecurityGroup(
        "cluster-sg",
        vpc_id=vpc.id,
        cluster_name=cluster_name,
        opts=pulumi.ResourceOptions(providers={"aws": provider}),
    )

    pulumi.export("vpc_id", vpc.id)
    pulumi.export("security_group_id", security_group.security_group_id)


def test_security_group_allows_all_outbound(ec2_client):
    with pulumi_stack_factory() as create_stack:
        stack = create_stack(
            program=_security_group_program,
            config_overrides={"tests:clusterName": "sg-test"},
        )
        result = stack.up(on_output=None)

        (group,) = ec2_client.describe_security_groups(
            GroupIds=[result.outputs["security_group_id"].value]
        )["SecurityGroups"]

        assert group["VpcId"] == result.outputs["vpc_id"].value
        assert group["Description"] == (
            "EKS cluster communication with worker nodes for sg-test"
        )
        assert any(
            permission["IpProtocol"] == "-1"
            and "0.0.0.0/0" in [ip_range["CidrIp"] for ip_range in permission["IpRanges"]]
            for permission in group["IpPermissionsEgress"]
        )
