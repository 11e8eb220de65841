"""
IAM Module Functions
Creates IAM roles for Kubernetes service accounts (IRSA)
"""

import json
import pulumi
import pulumi_aws as aws
from typing import Any, Dict, Optional

STS_AUDIENCE = "sts.amazonaws.com"


def build_irsa_trust_policy(oidc_provider_arn: str,
                            oidc_issuer: str,
                            namespace: str,
                            service_account: str) -> Dict[str, Any]:
    """
    Build the web-identity trust policy for a single service account

    Args:
        oidc_provider_arn: ARN of the cluster's IAM OIDC provider
        oidc_issuer: OIDC issuer URL (with or without https://)
        namespace: Kubernetes namespace of the service account
        service_account: Service account name

    Returns:
        Trust policy document as a dict
    """
    issuer_host = oidc_issuer.replace("https://", "")
    return {
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {
                "Federated": oidc_provider_arn
            },
            "Action": "sts:AssumeRoleWithWebIdentity",
            "Condition": {
                "StringEquals": {
                    f"{issuer_host}:sub": f"system:serviceaccount:{namespace}:{service_account}",
                    f"{issuer_host}:aud": STS_AUDIENCE
                }
            }
        }]
    }


def create_irsa_role(name: str,
                     oidc_provider_arn: 'pulumi.Input[str]',
                     oidc_issuer: 'pulumi.Input[str]',
                     namespace: str,
                     service_account: str,
                     policy_document: Optional[Dict[str, Any]],
                     tags: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create an IRSA role with a customer-managed policy attached

    Args:
        name: Role name (also used as Pulumi resource name prefix)
        oidc_provider_arn: ARN of the cluster's IAM OIDC provider
        oidc_issuer: OIDC issuer URL of the cluster
        namespace: Namespace of the bound service account
        service_account: Name of the bound service account
        policy_document: Serialized policy document (Version / Statement),
            or None to create the role without a policy
        tags: Additional tags

    Returns:
        Dict with role/policy resources and outputs
    """
    tags = tags or {}

    role = aws.iam.Role(
        f"{name}-role",
        name=name,
        assume_role_policy=pulumi.Output.all(oidc_provider_arn, oidc_issuer).apply(
            lambda args: json.dumps(
                build_irsa_trust_policy(args[0], args[1], namespace, service_account)
            )
        ),
        tags={
            **tags,
            "Name": name,
            "Module": "iam"
        }
    )

    if policy_document is None:
        return {
            "role": role,
            "policy": None,
            "policy_attachment": None,
            "role_arn": role.arn,
            "role_name": role.name,
            "policy_arn": None
        }

    policy = aws.iam.Policy(
        f"{name}-policy",
        name=f"{name}-policy",
        description=f"Access policy for service account {namespace}/{service_account}",
        policy=json.dumps(policy_document),
        tags={
            **tags,
            "Name": f"{name}-policy",
            "Module": "iam"
        }
    )

    policy_attachment = aws.iam.RolePolicyAttachment(
        f"{name}-policy-attachment",
        role=role.name,
        policy_arn=policy.arn
    )

    return {
        "role": role,
        "policy": policy,
        "policy_attachment": policy_attachment,
        "role_arn": role.arn,
        "role_name": role.name,
        "policy_arn": policy.arn
    }
