"""
Bedrock Module
Model-inference access policy derivation and IRSA role
"""

from .policy import (
    ALL_PROVIDERS,
    Capability,
    DerivationConfig,
    Effect,
    PolicyStatement,
    Provider,
    build_policy_document,
    derive,
    effective_providers,
    model_resource_patterns,
)
from .loader import load_derivation_config
from .functions import create_bedrock_resources

__all__ = [
    "ALL_PROVIDERS",
    "Capability",
    "DerivationConfig",
    "Effect",
    "PolicyStatement",
    "Provider",
    "build_policy_document",
    "derive",
    "effective_providers",
    "model_resource_patterns",
    "load_derivation_config",
    "create_bedrock_resources"
]
