"""Kubeconfig generation for EKS clusters."""

from .generator import KubeConfigGenerator
from .provider import ClusterNotFoundError, KubeConfig, KubeConfigProvider
from .synthesizer import (
    ClusterDescriptor,
    IncompleteClusterInfo,
    region_from_arn,
    synthesize,
)

__all__ = [
    "ClusterDescriptor",
    "ClusterNotFoundError",
    "IncompleteClusterInfo",
    "KubeConfig",
    "KubeConfigGenerator",
    "KubeConfigProvider",
    "region_from_arn",
    "synthesize",
]
