"""
Bedrock Access Policy
Derives the permission statements of the model-inference IRSA role
from enabled capabilities and provider filters
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Type

from irsa.errors import ConfigurationError

POLICY_VERSION = "2012-10-17"
FOUNDATION_MODEL_ARN = "arn:aws:bedrock:*::foundation-model/{prefix}*"
REGION_CONDITION_KEY = "aws:RequestedRegion"


class Capability(str, Enum):
    """Bedrock capabilities, declared in the order statements are emitted"""

    INVOKE = "invoke"
    STREAMING = "streaming"
    MODEL_CATALOG = "model_catalog"
    AGENTS = "agents"
    KNOWLEDGE_BASES = "knowledge_bases"
    GUARDRAILS = "guardrails"


class Provider(str, Enum):
    """Model providers, declared in the order resource patterns are emitted"""

    ANTHROPIC = "anthropic"
    AMAZON = "amazon"
    AI21 = "ai21"
    COHERE = "cohere"
    META = "meta"
    MISTRAL = "mistral"
    STABILITY = "stability"

    @property
    def prefix(self) -> str:
        return f"{self.value}."


class Effect(str, Enum):
    ALLOW = "Allow"
    DENY = "Deny"


ALL_PROVIDERS: Tuple[Provider, ...] = tuple(Provider)


def _reject_bare_string(values: Any, field_name: str) -> None:
    # A bare string would otherwise be iterated character by character
    if isinstance(values, (str, bytes)):
        raise ConfigurationError(field_name, values, ["a list of strings"])


def coerce_tags(values: Iterable[Any], enum_cls: Type[Enum], field_name: str) -> FrozenSet:
    """
    Convert raw tags into members of a closed set

    Args:
        values: Raw tag values (strings or enum members)
        enum_cls: Closed set the tags must belong to
        field_name: Config field name used in error messages

    Returns:
        Frozen set of enum members

    Raises:
        ConfigurationError: If any value is not a member of the set
    """
    _reject_bare_string(values, field_name)
    permitted = [member.value for member in enum_cls]
    members = set()
    for value in values:
        try:
            members.add(enum_cls(value))
        except ValueError:
            raise ConfigurationError(field_name, value, permitted) from None
    return frozenset(members)


@dataclass(frozen=True)
class PolicyStatement:
    """One allow/deny rule of an IAM policy document"""

    sid: str
    effect: Effect
    actions: Tuple[str, ...]
    resources: Tuple[str, ...]
    condition: Optional[Dict[str, Dict[str, List[str]]]] = field(default=None, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        statement = {
            "Sid": self.sid,
            "Effect": self.effect.value,
            "Action": list(self.actions),
            "Resource": list(self.resources),
        }
        if self.condition is not None:
            statement["Condition"] = {operator: {key: list(value) for key, value in pairs.items()}
                                      for operator, pairs in self.condition.items()}
        return statement


@dataclass(frozen=True)
class DerivationConfig:
    """
    Validated input of a single policy derivation

    Tags are coerced into Capability / Provider members on construction,
    so an instance that exists has already passed closed-set validation.
    """

    capabilities: FrozenSet[Capability] = frozenset()
    allowed_providers: FrozenSet[Provider] = frozenset()
    excluded_providers: FrozenSet[Provider] = frozenset()
    use_custom_resources: bool = False
    custom_resource_patterns: Tuple[str, ...] = ()
    allowed_regions: Tuple[str, ...] = ()
    agent_resources: Tuple[str, ...] = ()
    knowledge_base_resources: Tuple[str, ...] = ()
    guardrail_resources: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "capabilities",
                           coerce_tags(self.capabilities, Capability, "capabilities"))
        object.__setattr__(self, "allowed_providers",
                           coerce_tags(self.allowed_providers, Provider, "allowed_providers"))
        object.__setattr__(self, "excluded_providers",
                           coerce_tags(self.excluded_providers, Provider, "excluded_providers"))
        for name in ("custom_resource_patterns", "allowed_regions", "agent_resources",
                     "knowledge_base_resources", "guardrail_resources"):
            values = getattr(self, name)
            _reject_bare_string(values, name)
            object.__setattr__(self, name, tuple(values))


def effective_providers(config: DerivationConfig) -> List[Provider]:
    """
    Resolve which providers the model statements cover

    An empty allow-list allows every provider. Exclusions always win.
    The result follows provider declaration order, never input order.
    """
    base_pool = config.allowed_providers or frozenset(ALL_PROVIDERS)
    return [provider for provider in ALL_PROVIDERS
            if provider in base_pool and provider not in config.excluded_providers]


def model_resource_patterns(config: DerivationConfig) -> List[str]:
    """Resource patterns for the invoke and streaming statements"""
    if config.use_custom_resources:
        return list(config.custom_resource_patterns)
    return [FOUNDATION_MODEL_ARN.format(prefix=provider.prefix)
            for provider in effective_providers(config)]


def _region_condition(config: DerivationConfig) -> Dict[str, Dict[str, List[str]]]:
    return {"StringEquals": {REGION_CONDITION_KEY: list(config.allowed_regions)}}


def _build_statement(capability: Capability,
                     config: DerivationConfig,
                     model_resources: List[str]) -> Optional[PolicyStatement]:
    if capability not in config.capabilities:
        return None

    if capability is Capability.INVOKE:
        return PolicyStatement(
            sid="BedrockInvokeModel",
            effect=Effect.ALLOW,
            actions=("bedrock:InvokeModel",),
            resources=tuple(model_resources),
            condition=_region_condition(config),
        )
    if capability is Capability.STREAMING:
        return PolicyStatement(
            sid="BedrockInvokeModelWithResponseStream",
            effect=Effect.ALLOW,
            actions=("bedrock:InvokeModelWithResponseStream",),
            resources=tuple(model_resources),
            condition=_region_condition(config),
        )
    if capability is Capability.MODEL_CATALOG:
        return PolicyStatement(
            sid="BedrockModelCatalog",
            effect=Effect.ALLOW,
            actions=("bedrock:ListFoundationModels", "bedrock:GetFoundationModel"),
            resources=("*",),
        )
    if capability is Capability.AGENTS:
        return PolicyStatement(
            sid="BedrockAgents",
            effect=Effect.ALLOW,
            actions=("bedrock:InvokeAgent", "bedrock:GetAgent"),
            resources=config.agent_resources,
        )
    if capability is Capability.KNOWLEDGE_BASES:
        return PolicyStatement(
            sid="BedrockKnowledgeBases",
            effect=Effect.ALLOW,
            actions=("bedrock:Retrieve", "bedrock:RetrieveAndGenerate"),
            resources=config.knowledge_base_resources,
        )
    # Capability.GUARDRAILS
    return PolicyStatement(
        sid="BedrockGuardrails",
        effect=Effect.ALLOW,
        actions=("bedrock:ApplyGuardrail",),
        resources=config.guardrail_resources,
    )


def derive(config: DerivationConfig) -> List[PolicyStatement]:
    """
    Derive the ordered statement list for the model-inference role

    Args:
        config: Validated derivation input

    Returns:
        Statements in canonical capability order, one per enabled capability
    """
    model_resources = model_resource_patterns(config)
    statements = [_build_statement(capability, config, model_resources)
                  for capability in Capability]
    return [statement for statement in statements if statement is not None]


def build_policy_document(statements: Iterable[PolicyStatement]) -> Dict[str, Any]:
    """Wrap statements into an IAM policy document, keeping their order"""
    return {
        "Version": POLICY_VERSION,
        "Statement": [statement.to_dict() for statement in statements],
    }
