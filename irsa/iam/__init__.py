"""
IAM Module
IRSA role and trust policy helpers
"""

from .functions import build_irsa_trust_policy, create_irsa_role

__all__ = [
    "build_irsa_trust_policy",
    "create_irsa_role"
]
