"""Kubeconfig rendering for EKS clusters authenticated through `aws eks get-token`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from textwrap import dedent

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
EXEC_API_VERSION = "client.authentication.k8s.io/v1alpha1"
KUBECONFIG_USER = "aws"

_REQUIRED_FIELDS = ("name", "endpoint", "certificate_authority_data")


class IncompleteClusterInfo(ValueError):
    """Raised when a cluster descriptor lacks a field needed to build a kubeconfig."""

    def __init__(self, missing_fields: tuple[str, ...]) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            f"Incomplete cluster information: missing {', '.join(missing_fields)}"
        )


@dataclass(frozen=True)
class ClusterDescriptor:
    """Identity and connection details of an EKS cluster."""

    name: str | None
    endpoint: str | None
    certificate_authority_data: str | None
    arn: str | None = None

    @classmethod
    def from_describe_cluster(cls, cluster: dict) -> "ClusterDescriptor":
        """Create a descriptor from the `cluster` payload of an EKS DescribeCluster call."""
        return cls(
            name=cluster.get("name"),
            endpoint=cluster.get("endpoint"),
            certificate_authority_data=(cluster.get("certificateAuthority") or {}).get(
                "data"
            ),
            arn=cluster.get("arn"),
        )

    @property
    def missing_fields(self) -> tuple[str, ...]:
        return tuple(name for name in _REQUIRED_FIELDS if not getattr(self, name))


def region_from_arn(arn: str | None) -> str:
    """Return the region field of an ARN, or DEFAULT_REGION if it cannot be read."""
    parts = arn.split(":") if arn else []
    if len(parts) < 4 or not parts[3]:
        logger.debug("No region in ARN %r, using %s", arn, DEFAULT_REGION)
        return DEFAULT_REGION
    return parts[3]


def synthesize(descriptor: ClusterDescriptor) -> str:
    """Render a kubeconfig document for the described cluster.

    The document holds a single cluster, context and user. The user obtains
    its token by running `aws eks get-token` in the region named by the
    cluster ARN.

    Raises:
        IncompleteClusterInfo: if name, endpoint or CA data is missing or empty.
    """
    missing = descriptor.missing_fields
    if missing:
        raise IncompleteClusterInfo(missing)

    name = descriptor.name
    region = region_from_arn(descriptor.arn)

    return dedent(
        f"""\
        apiVersion: v1
        kind: Config
        clusters:
        - cluster:
            server: {descriptor.endpoint}
            certificate-authority-data: {descriptor.certificate_authority_data}
          name: {name}
        contexts:
        - context:
            cluster: {name}
            user: {KUBECONFIG_USER}
          name: {name}
        current-context: {name}
        preferences: {{}}
        users:
        - name: {KUBECONFIG_USER}
          user:
            exec:
              apiVersion: {EXEC_API_VERSION}
              command: aws
              args:
                - --region
                - {region}
                - eks
                - get-token
                - --cluster-name
                - {name}
        """
    )
