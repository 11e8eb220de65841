"""
Configuration management for the Bedrock IRSA deployment
"""

import pulumi
from typing import Dict

from irsa.bedrock import DerivationConfig, load_derivation_config


class Config:
    """Centralized configuration management for the IRSA stack"""

    def __init__(self):
        self.config = pulumi.Config()

        # AWS Configuration
        self.aws_region = self.config.get("aws:region") or "af-south-1"

        # Cluster Configuration
        self.cluster_name = self.config.get("cluster_name") or "builder-space"
        self.oidc_provider_arn = self.config.require("oidc_provider_arn")
        self.oidc_issuer = self.config.require("oidc_issuer")

        # Workload binding
        self.namespace = self.config.get("namespace") or "bedrock"
        self.service_account = self.config.get("service_account") or "bedrock-inference"
        self.role_name = self.config.get("role_name") or f"{self.cluster_name}-bedrock-inference"

        # Bedrock access, see irsa.bedrock.loader for the accepted keys
        self.bedrock = self.config.get_object("bedrock") or {}

        # Additional tags
        self.additional_tags = self.config.get_object("tags") or {}

    @property
    def common_tags(self) -> Dict[str, str]:
        """Get common tags for all resources"""
        base_tags = {
            "Project": "builder-space-irsa",
            "Cluster": self.cluster_name,
            "ManagedBy": "pulumi"
        }
        base_tags.update(self.additional_tags)
        return base_tags

    @property
    def derivation_config(self) -> DerivationConfig:
        """Validated Bedrock access configuration"""
        return load_derivation_config(self.bedrock, default_region=self.aws_region)


def get_config() -> Config:
    """Get the global configuration instance"""
    return Config()
