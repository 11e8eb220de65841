"""
Bedrock model-inference role for EKS workloads (IRSA)
"""
import pulumi
from config import get_config
from irsa.bedrock import create_bedrock_resources

config = get_config()

# Fails the preview before any resource is declared when the config is invalid
derivation_config = config.derivation_config

bedrock = create_bedrock_resources(
    name=config.role_name,
    derivation_config=derivation_config,
    oidc_provider_arn=config.oidc_provider_arn,
    oidc_issuer=config.oidc_issuer,
    namespace=config.namespace,
    service_account=config.service_account,
    tags=config.common_tags,
)

# Exports
pulumi.export("bedrock_role_arn", bedrock["role_arn"])
pulumi.export("bedrock_role_name", bedrock["role_name"])
pulumi.export("bedrock_policy_arn", bedrock["policy_arn"])
pulumi.export("bedrock_policy_document", bedrock["policy_document"])
pulumi.export("service_account_annotations", bedrock["service_account_annotations"])
