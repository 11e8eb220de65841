"""
Pulumi modules for EKS workload IAM roles (IRSA)
"""

from .errors import ConfigurationError
from .iam import create_irsa_role
from .bedrock import create_bedrock_resources

__all__ = [
    "ConfigurationError",
    "create_irsa_role",
    "create_bedrock_resources"
]
