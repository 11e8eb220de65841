"""
Bedrock configuration loader
Turns the raw `bedrock` stack config object into a validated DerivationConfig
"""

from typing import Any, Dict, List, Mapping, Optional

import pulumi

from irsa.errors import ConfigurationError
from .policy import Capability, DerivationConfig

LIST_FIELDS = (
    "capabilities",
    "allowed_providers",
    "excluded_providers",
    "custom_resource_patterns",
    "allowed_regions",
    "agent_resources",
    "knowledge_base_resources",
    "guardrail_resources",
)
FLAG_FIELDS = ("use_custom_resources",)

# Capabilities whose statements are scoped by provider resource patterns
MODEL_CAPABILITIES = frozenset({Capability.INVOKE, Capability.STREAMING})


def _read_list(raw: Mapping[str, Any], key: str) -> List[str]:
    value = raw.get(key)
    if value is None:
        return []
    # A bare string would otherwise be iterated character by character
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigurationError(key, value, ["a list of strings"])
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(key, item, ["a list of strings"])
    return list(value)


def _read_flag(raw: Mapping[str, Any], key: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(key, value, ["true", "false"])
    return value


def load_derivation_config(raw: Optional[Mapping[str, Any]],
                           default_region: str = "") -> DerivationConfig:
    """
    Build a DerivationConfig from declarative input

    Args:
        raw: Mapping as read from stack config (keys as in LIST_FIELDS / FLAG_FIELDS)
        default_region: Region used when `allowed_regions` is not set

    Returns:
        Validated, immutable DerivationConfig

    Raises:
        ConfigurationError: On unknown keys, wrongly typed values, or
            capability/provider tags outside their closed sets
    """
    raw = raw or {}
    known = set(LIST_FIELDS) | set(FLAG_FIELDS)
    for key in raw:
        if key not in known:
            raise ConfigurationError("bedrock", key, sorted(known))

    values: Dict[str, Any] = {key: _read_list(raw, key) for key in LIST_FIELDS}
    values.update({key: _read_flag(raw, key) for key in FLAG_FIELDS})

    if "allowed_regions" not in raw and default_region:
        values["allowed_regions"] = [default_region]

    config = DerivationConfig(**values)

    uses_model_patterns = bool(config.capabilities & MODEL_CAPABILITIES)
    if uses_model_patterns and not config.allowed_providers and not config.use_custom_resources:
        pulumi.log.warn(
            "bedrock.allowed_providers is empty: every model provider is allowed "
            "unless listed in bedrock.excluded_providers"
        )
    if config.use_custom_resources and (config.allowed_providers or config.excluded_providers):
        pulumi.log.warn(
            "bedrock.use_custom_resources is set: provider filters do not apply "
            "to model resource patterns"
        )

    pulumi.log.debug(
        f"Loaded bedrock config with capabilities "
        f"{sorted(c.value for c in config.capabilities)}"
    )
    return config
