import json

import pulumi
import pulumi_aws as aws
import yaml

from .provider import KubeConfig


class KubeConfigGenerator(pulumi.ComponentResource):
    """Kubeconfig for an EKS cluster as a Pulumi ComponentResource."""

    kubeconfig: pulumi.Output[str]
    kubeconfig_json: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        cluster: aws.eks.Cluster,
        region: pulumi.Input[str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-cluster:eks:KubeConfigGenerator", name, None, opts)

        self.resource = KubeConfig(
            f"{name}-resource",
            cluster_name=cluster.name,
            cluster_arn=cluster.arn,
            region=region,
            opts=pulumi.ResourceOptions(parent=self, depends_on=[cluster]),
        )

        self.kubeconfig = pulumi.Output.secret(self.resource.kubeconfig)
        self.kubeconfig_json = pulumi.Output.secret(
            self.resource.kubeconfig.apply(
                lambda document: json.dumps(yaml.safe_load(document))
            )
        )

        self.register_outputs(
            {
                "kubeconfig": self.kubeconfig,
                "kubeconfig_json": self.kubeconfig_json,
            }
        )
