"""Dynamic resource that resolves an EKS cluster and renders its kubeconfig."""

from __future__ import annotations

import json
import logging
from typing import Any

import boto3
import pulumi
from botocore.exceptions import ClientError
from pulumi.dynamic import (
    CreateResult,
    DiffResult,
    Resource,
    ResourceProvider,
    UpdateResult,
)

from .synthesizer import ClusterDescriptor, region_from_arn, synthesize

logger = logging.getLogger(__name__)

PHYSICAL_ID_PREFIX = "kubeconfig-"


class ClusterNotFoundError(LookupError):
    """Raised when DescribeCluster does not return the requested cluster."""


def physical_id(cluster_name: str) -> str:
    return f"{PHYSICAL_ID_PREFIX}{cluster_name}"


def _eks_client(region: str | None):
    return boto3.client("eks", region_name=region)


def _resolve_region(props: dict[str, Any]) -> str | None:
    if props.get("region"):
        return props["region"]
    if props.get("cluster_arn"):
        return region_from_arn(props["cluster_arn"])
    return None


def describe_cluster(cluster_name: str, region: str | None) -> ClusterDescriptor:
    """Fetch the cluster descriptor from the EKS API."""
    try:
        response = _eks_client(region).describe_cluster(name=cluster_name)
    except ClientError as err:
        if err.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
            raise ClusterNotFoundError(f"Cluster {cluster_name} not found") from err
        raise

    cluster = response.get("cluster")
    if not cluster:
        raise ClusterNotFoundError(f"Cluster {cluster_name} not found")
    return ClusterDescriptor.from_describe_cluster(cluster)


class KubeConfigProvider(ResourceProvider):
    """Lifecycle handler for the KubeConfig resource.

    Create and update look the cluster up and render a fresh kubeconfig.
    Delete has nothing to clean up. Outputs keep the raw `cluster_arn` and
    `region` inputs so that diff compares like with like; the values used
    for the lookup are stored under `resolved_arn` and `lookup_region`.
    """

    def _render(self, props: dict[str, Any]) -> dict[str, Any]:
        cluster_name = props.get("cluster_name")
        if not cluster_name:
            raise ValueError("cluster_name property is required")

        region = _resolve_region(props)
        descriptor = describe_cluster(cluster_name, region)
        kubeconfig = synthesize(descriptor)
        logger.info("Generated kubeconfig for cluster %s", cluster_name)

        return {
            "cluster_name": cluster_name,
            "cluster_arn": props.get("cluster_arn"),
            "region": props.get("region"),
            "resolved_arn": descriptor.arn,
            "lookup_region": region,
            "kubeconfig": kubeconfig,
        }

    def create(self, props: dict[str, Any]) -> CreateResult:
        logger.info("Create event: %s", json.dumps(props, default=str))
        try:
            outs = self._render(props)
        except Exception:
            logger.exception("Failed to create kubeconfig")
            raise
        return CreateResult(id_=physical_id(outs["cluster_name"]), outs=outs)

    def diff(
        self, _id: str, _olds: dict[str, Any], _news: dict[str, Any]
    ) -> DiffResult:
        changed = [
            key
            for key in ("cluster_name", "cluster_arn", "region")
            if _olds.get(key) != _news.get(key)
        ]
        return DiffResult(
            changes=bool(changed),
            replaces=[key for key in changed if key == "cluster_name"],
            delete_before_replace=False,
        )

    def update(
        self, _id: str, _olds: dict[str, Any], _news: dict[str, Any]
    ) -> UpdateResult:
        logger.info("Update event for %s: %s", _id, json.dumps(_news, default=str))
        try:
            outs = self._render(_news)
        except Exception:
            logger.exception("Failed to update kubeconfig")
            raise
        return UpdateResult(outs=outs)

    def delete(self, _id: str, _props: dict[str, Any]) -> None:
        # Nothing was created outside of Pulumi state.
        logger.info("Delete event for %s", _id)


class KubeConfig(Resource):
    """Kubeconfig for an existing EKS cluster, rendered by KubeConfigProvider."""

    cluster_name: pulumi.Output[str]
    cluster_arn: pulumi.Output[str]
    region: pulumi.Output[str | None]
    resolved_arn: pulumi.Output[str]
    lookup_region: pulumi.Output[str | None]
    kubeconfig: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        cluster_name: pulumi.Input[str],
        cluster_arn: pulumi.Input[str] | None = None,
        region: pulumi.Input[str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        opts = (opts or pulumi.ResourceOptions()).merge(
            pulumi.ResourceOptions(additional_secret_outputs=["kubeconfig"])
        )
        super().__init__(
            KubeConfigProvider(),
            name,
            {
                "cluster_name": cluster_name,
                "cluster_arn": cluster_arn,
                "region": region,
                "resolved_arn": None,
                "lookup_region": None,
                "kubeconfig": None,
            },
            opts,
        )
