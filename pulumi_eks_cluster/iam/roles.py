import json

import pulumi
import pulumi_aws as aws

from ..eks.config import CLUSTER_POLICIES, EKS_NODE_POLICIES


def assume_role_policy(service: str) -> str:
    """Trust policy allowing an AWS service principal to assume the role."""
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"Service": service},
                    "Action": "sts:AssumeRole",
                }
            ],
        }
    )


class _ServiceRole(pulumi.ComponentResource):
    """IAM role for an AWS service with managed policies attached."""

    role: aws.iam.Role
    policy_attachments: list[aws.iam.RolePolicyAttachment]

    _type_name: str
    _service: str
    _default_policy_arns: list[str]

    def __init__(
        self,
        name: str,
        policy_arns: list[str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__(self._type_name, name, None, opts)

        policy_arns = list(policy_arns or self._default_policy_arns)

        self.role = aws.iam.Role(
            f"{name}-role",
            assume_role_policy=assume_role_policy(self._service),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.policy_attachments = [
            aws.iam.RolePolicyAttachment(
                f"{name}-policy-{idx}",
                role=self.role.name,
                policy_arn=policy_arn,
                opts=pulumi.ResourceOptions(parent=self),
            )
            for idx, policy_arn in enumerate(policy_arns)
        ]

        self.register_outputs(
            {
                "role_arn": self.role.arn,
                "role_name": self.role.name,
            }
        )


class ClusterRole(_ServiceRole):
    """IAM role assumed by the EKS control plane."""

    _type_name = "pulumi-eks-cluster:iam:ClusterRole"
    _service = "eks.amazonaws.com"
    _default_policy_arns = CLUSTER_POLICIES


class NodeGroupRole(_ServiceRole):
    """IAM role assumed by the worker node EC2 instances."""

    _type_name = "pulumi-eks-cluster:iam:NodeGroupRole"
    _service = "ec2.amazonaws.com"
    _default_policy_arns = EKS_NODE_POLICIES
