"""
Unit tests for loading Bedrock settings from stack config
"""

import unittest
from unittest.mock import patch
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from irsa.errors import ConfigurationError
from irsa.bedrock.loader import load_derivation_config
from irsa.bedrock.policy import Capability, Provider, derive


class TestLoadDerivationConfig(unittest.TestCase):
    """Raw config object to DerivationConfig"""

    def setUp(self):
        patcher = patch('irsa.bedrock.loader.pulumi')
        self.mock_pulumi = patcher.start()
        self.addCleanup(patcher.stop)

    def test_empty_config(self):
        config = load_derivation_config(None)

        self.assertEqual(config.capabilities, frozenset())
        self.assertEqual(config.allowed_regions, ())
        self.assertFalse(config.use_custom_resources)
        self.assertEqual(derive(config), [])

    def test_full_config(self):
        config = load_derivation_config({
            "capabilities": ["invoke", "agents"],
            "allowed_providers": ["anthropic", "amazon"],
            "excluded_providers": ["amazon"],
            "allowed_regions": ["us-west-2"],
            "agent_resources": ["agent/*"],
        }, default_region="us-east-1")

        self.assertEqual(config.capabilities, frozenset({Capability.INVOKE, Capability.AGENTS}))
        self.assertEqual(config.allowed_providers, frozenset({Provider.ANTHROPIC, Provider.AMAZON}))
        self.assertEqual(config.excluded_providers, frozenset({Provider.AMAZON}))
        self.assertEqual(config.allowed_regions, ("us-west-2",))
        self.assertEqual(config.agent_resources, ("agent/*",))

    def test_default_region_used_when_regions_unset(self):
        config = load_derivation_config({"capabilities": ["invoke"]}, default_region="af-south-1")
        self.assertEqual(config.allowed_regions, ("af-south-1",))

    def test_explicit_empty_regions_kept(self):
        config = load_derivation_config({"allowed_regions": []}, default_region="af-south-1")
        self.assertEqual(config.allowed_regions, ())

    def test_invalid_capability(self):
        with self.assertRaises(ConfigurationError) as ctx:
            load_derivation_config({"capabilities": ["bogus"]})
        self.assertEqual(ctx.exception.value, "bogus")
        self.assertEqual(ctx.exception.field, "capabilities")

    def test_invalid_provider(self):
        with self.assertRaises(ConfigurationError) as ctx:
            load_derivation_config({"excluded_providers": ["openai"]})
        self.assertEqual(ctx.exception.field, "excluded_providers")

    def test_unknown_key(self):
        with self.assertRaises(ConfigurationError) as ctx:
            load_derivation_config({"capability": ["invoke"]})
        self.assertEqual(ctx.exception.field, "bedrock")
        self.assertEqual(ctx.exception.value, "capability")

    def test_string_instead_of_list(self):
        with self.assertRaises(ConfigurationError) as ctx:
            load_derivation_config({"capabilities": "invoke"})
        self.assertEqual(ctx.exception.field, "capabilities")

    def test_non_string_list_item(self):
        with self.assertRaises(ConfigurationError):
            load_derivation_config({"agent_resources": ["agent/*", 42]})

    def test_flag_must_be_boolean(self):
        with self.assertRaises(ConfigurationError) as ctx:
            load_derivation_config({"use_custom_resources": "yes"})
        self.assertEqual(ctx.exception.field, "use_custom_resources")

    def test_warns_on_default_open_providers(self):
        load_derivation_config({"capabilities": ["invoke"]})

        self.mock_pulumi.log.warn.assert_called_once()
        self.assertIn("every model provider is allowed",
                      self.mock_pulumi.log.warn.call_args[0][0])

    def test_no_provider_warning_without_model_capabilities(self):
        """Provider filters only matter for invoke and streaming"""
        for capabilities in ([], ["agents"], ["model_catalog", "knowledge_bases", "guardrails"]):
            with self.subTest(capabilities=capabilities):
                self.mock_pulumi.log.warn.reset_mock()
                load_derivation_config({"capabilities": capabilities})
                self.mock_pulumi.log.warn.assert_not_called()

    def test_provider_warning_for_streaming(self):
        load_derivation_config({"capabilities": ["streaming"]})
        self.mock_pulumi.log.warn.assert_called_once()

    def test_no_warning_with_allow_list(self):
        load_derivation_config({"allowed_providers": ["meta"]})
        self.mock_pulumi.log.warn.assert_not_called()

    def test_warns_when_custom_resources_override_filters(self):
        load_derivation_config({
            "use_custom_resources": True,
            "custom_resource_patterns": ["arn:custom/*"],
            "allowed_providers": ["anthropic"],
        })

        self.mock_pulumi.log.warn.assert_called_once()
        self.assertIn("use_custom_resources", self.mock_pulumi.log.warn.call_args[0][0])


if __name__ == '__main__':
    unittest.main()
