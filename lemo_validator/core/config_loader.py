"""
Validation configuration loader.

Loads and parses validation rules from YAML configuration files.
"""

import yaml
from typing import Dict, Any, List, Optional, Union
from pathlib import Path

from lemo_validator.core.exceptions import ConfigurationError
from lemo_validator.utils.config import settings
from lemo_validator.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent.parent / "config" / "validation" / "rules.yaml"


class ValidationConfigLoader:
    """
    Loads validation configuration from YAML files.

    Supports:
    - Form rules (list of validator configurations per form)
    - Global settings
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to validation rules YAML file
                        If None, uses LEMO_VALIDATOR_VALIDATION_RULES_PATH
                        or the rules.yaml shipped in lemo_validator/config/validation
        """
        if config_path is None:
            config_path = settings.VALIDATION_RULES_PATH or DEFAULT_RULES_PATH

        self.config_path = Path(config_path)
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            ConfigurationError: If YAML parsing fails or the top level is not a mapping
        """
        if not self.config_path.exists():
            logger.warning(
                f"Validation config file not found: {self.config_path}. "
                "Using empty configuration."
            )
            self._config = self._get_default_config()
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse validation config: {e}")
            raise ConfigurationError(f"Failed to parse {self.config_path}: {e}") from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"{self.config_path} must contain a mapping at the top level")

        self._config = config
        logger.info(f"Loaded validation config from: {self.config_path}")
        return self._config

    def get_form_rules(self, form_type: str) -> List[Dict[str, Any]]:
        """
        Get validation rules for a specific form.

        Args:
            form_type: Form identifier

        Returns:
            List of validation rule configurations
        """
        if self._config is None:
            self.load()

        forms = self._config.get('forms') or {}
        form_config = forms.get(form_type) or {}
        return form_config.get('validations') or []

    def get_form_types(self) -> List[str]:
        """
        Get all form identifiers defined in the configuration.

        Returns:
            List of form names
        """
        if self._config is None:
            self.load()

        return list((self._config.get('forms') or {}).keys())

    def get_global_settings(self) -> Dict[str, Any]:
        """
        Get global validation settings.

        Returns:
            Global settings dictionary
        """
        if self._config is None:
            self.load()

        return self._config.get('global') or {}

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration when file doesn't exist.

        Returns:
            Default configuration dictionary
        """
        return {
            'global': {
                'stop_on_first_error': False,
                'skip_missing': True,
            },
            'forms': {}
        }

    def reload(self) -> Dict[str, Any]:
        """
        Reload configuration from file.

        Returns:
            Updated configuration dictionary
        """
        self._config = None
        return self.load()


def load_validation_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Convenience function to load validation configuration.

    Args:
        config_path: Optional path to config file

    Returns:
        Configuration dictionary
    """
    loader = ValidationConfigLoader(config_path)
    return loader.load()
