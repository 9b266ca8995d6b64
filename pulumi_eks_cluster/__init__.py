"""Pulumi components for an EKS cluster with a generated kubeconfig."""

from . import eks, iam, kubeconfig, security

__all__ = ["eks", "iam", "kubeconfig", "security"]
