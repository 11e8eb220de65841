"""
Bedrock Module Functions
Model-inference IRSA role: derives the access policy and provisions the role
"""

import pulumi
from typing import Any, Dict

from irsa.iam.functions import create_irsa_role
from .policy import DerivationConfig, build_policy_document, derive, effective_providers

ROLE_ARN_ANNOTATION = "eks.amazonaws.com/role-arn"


def create_bedrock_resources(name: str,
                             derivation_config: DerivationConfig,
                             oidc_provider_arn: 'pulumi.Input[str]',
                             oidc_issuer: 'pulumi.Input[str]',
                             namespace: str = "bedrock",
                             service_account: str = "bedrock-inference",
                             tags: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create the model-inference IRSA role

    Args:
        name: Role name
        derivation_config: Validated Bedrock access configuration
        oidc_provider_arn: ARN of the cluster's IAM OIDC provider
        oidc_issuer: OIDC issuer URL of the cluster
        namespace: Namespace of the workload's service account
        service_account: Name of the workload's service account
        tags: Additional tags

    Returns:
        Dict with role outputs, the policy document and internal resources
    """
    tags = tags or {}

    statements = derive(derivation_config)
    policy_document = build_policy_document(statements)

    if derivation_config.use_custom_resources:
        pulumi.log.info(f"{name}: using {len(derivation_config.custom_resource_patterns)} custom model resource patterns")
    else:
        providers = [p.value for p in effective_providers(derivation_config)]
        pulumi.log.info(f"{name}: model access for providers {providers}")
    if statements:
        pulumi.log.info(f"{name}: {len(statements)} policy statements "
                        f"({', '.join(s.sid for s in statements)})")
    else:
        # IAM rejects a policy with an empty Statement list
        pulumi.log.warn(f"{name}: no bedrock capabilities enabled, creating the role without a policy")

    role_result = create_irsa_role(
        name=name,
        oidc_provider_arn=oidc_provider_arn,
        oidc_issuer=oidc_issuer,
        namespace=namespace,
        service_account=service_account,
        policy_document=policy_document if statements else None,
        tags={**tags, "Workload": "bedrock"}
    )

    return {
        "role_arn": role_result["role_arn"],
        "role_name": role_result["role_name"],
        "policy_arn": role_result["policy_arn"],
        "policy_document": policy_document,
        "service_account_annotations": role_result["role_arn"].apply(
            lambda arn: {ROLE_ARN_ANNOTATION: arn}
        ),
        # Keep references to resources for dependencies
        "_role": role_result["role"],
        "_policy": role_result["policy"],
        "_policy_attachment": role_result["policy_attachment"]
    }
