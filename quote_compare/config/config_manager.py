#!/usr/bin/env python3
"""
Configuration Manager for QuoteCompare using Pydantic models.
Manages matching, scoring, policy and integration tunables persisted as JSON.
"""

import json
import os
from typing import Optional
from pathlib import Path
import logging
from pydantic import ValidationError
from quote_compare.models.config_models import (
    AppConfig,
    ConfigSection,
    ConfigUpdateRequest,
    IntegrationsConfig,
    MatchingConfig,
    PolicyConfig,
    ScoringConfig
)

CONFIG_ENV_VAR = 'QUOTE_COMPARE_CONFIG'


class ConfigManager:
    """Manages QuoteCompare configuration using Pydantic models"""

    def __init__(self, config_file_path: Optional[str] = None):
        self.logger = logging.getLogger(self.__class__.__name__)

        if config_file_path is None:
            config_file_path = os.environ.get(CONFIG_ENV_VAR)

        # Default config file location
        if config_file_path is None:
            self.config_dir = Path.home() / '.quote_compare'
            os.makedirs(self.config_dir, exist_ok=True)
            self.config_file = self.config_dir / 'config.json'
        else:
            self.config_file = Path(config_file_path)
            self.config_dir = self.config_file.parent

        self.config = self._load_config()

    def _load_config(self) -> AppConfig:
        """Load configuration from file, create default if doesn't exist"""
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    config_data = json.load(f)
                config = AppConfig(**config_data)
                self.logger.info(f"Loaded configuration from {self.config_file}")
                return config
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            self.logger.error(f"Error loading config file: {e}")

        # Return default config and save it
        default_config = AppConfig.get_default_config()
        self._save_config(default_config)
        self.logger.info("Created default configuration")
        return default_config

    def _save_config(self, config: AppConfig) -> None:
        """Save configuration to file"""
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(config.model_dump(mode='json'), f, indent=2, ensure_ascii=False)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except OSError as e:
            self.logger.error(f"Error saving config file: {e}")
            raise

    @property
    def matching(self) -> MatchingConfig:
        return self.config.matching

    @property
    def scoring(self) -> ScoringConfig:
        return self.config.scoring

    @property
    def policy(self) -> PolicyConfig:
        return self.config.policy

    @property
    def integrations(self) -> IntegrationsConfig:
        return self.config.integrations

    def get_all_configs(self) -> AppConfig:
        """Get the complete configuration"""
        return self.config

    def update_config(self, update_request: ConfigUpdateRequest) -> bool:
        """
        Update one configuration section.

        The merged section is re-validated as a whole, so an invalid value leaves
        the current configuration untouched.
        """
        section_name = update_request.section.value
        current_section = getattr(self.config, section_name)

        unknown = [field for field in update_request.values if field not in type(current_section).model_fields]
        if unknown:
            self.logger.error(f"Unknown fields for {section_name}: {unknown}")
            return False

        try:
            merged = {**current_section.model_dump(), **update_request.values}
            new_section = type(current_section)(**merged)
        except ValidationError as e:
            self.logger.error(f"Invalid values for {section_name}: {e}")
            return False

        self.config = self.config.model_copy(update={section_name: new_section})
        for field, value in update_request.values.items():
            self.logger.info(f"Updated {section_name}.{field} to {value}")

        self._save_config(self.config)
        self.logger.info(f"Configuration updated successfully for {section_name}")
        return True

    def reset_to_defaults(self) -> bool:
        """Reset configuration to defaults"""
        try:
            self.config = AppConfig.get_default_config()
            self._save_config(self.config)
            self.logger.info("Configuration reset to defaults")
            return True
        except OSError as e:
            self.logger.error(f"Error resetting config to defaults: {e}")
            return False

    def get_config_summary(self) -> dict:
        """Get a summary of current configuration for display"""
        summary = {}
        for section in ConfigSection:
            summary[section.value] = getattr(self.config, section.value).model_dump(mode='json')
        # Never echo credentials
        if summary[ConfigSection.INTEGRATIONS.value].get('orchestrate_api_key'):
            summary[ConfigSection.INTEGRATIONS.value]['orchestrate_api_key'] = '***'
        return summary
