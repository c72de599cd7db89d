"""
Configuration management for the AsciiDoc text AST converter.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from txtast.txt_ast_errors import AdocConverterConfigError


def _default_table_attribute_denylist() -> List[str]:
    return ["attribute_entries", "colcount", "rowcount", "style", "tablepcwidth"]


def _default_image_attribute_names() -> List[str]:
    return ["alt", "imagesdir", "target"]


@dataclass
class AdocConverterConfig:
    """Settings that control how spans are searched for and which metadata nodes are emitted."""

    comment_marker: str = "//"
    id_lookback: int = 2
    title_lookback: int = 3
    attributes_lookback: int = 2
    table_attribute_denylist: List[str] = field(default_factory=_default_table_attribute_denylist)
    image_attribute_names: List[str] = field(default_factory=_default_image_attribute_names)
    include_authors: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AdocConverterConfig':
        """Create a configuration from a dictionary, using defaults for missing keys."""
        default = cls()
        return cls(
            comment_marker=data.get('comment_marker', default.comment_marker),
            id_lookback=data.get('id_lookback', default.id_lookback),
            title_lookback=data.get('title_lookback', default.title_lookback),
            attributes_lookback=data.get('attributes_lookback', default.attributes_lookback),
            table_attribute_denylist=data.get('table_attribute_denylist', default.table_attribute_denylist),
            image_attribute_names=data.get('image_attribute_names', default.image_attribute_names),
            include_authors=data.get('include_authors', default.include_authors)
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> 'AdocConverterConfig':
        """
        Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            AdocConverterConfigError: If the file holds invalid settings
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise AdocConverterConfigError([f"Expected a mapping at the top level of {config_path}"])

        config = cls.from_dict(data)
        errors = config.validate()
        if errors:
            raise AdocConverterConfigError(errors)

        return config

    @classmethod
    def create_default(cls) -> 'AdocConverterConfig':
        """Create the default configuration."""
        return cls()

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        data = {
            'comment_marker': self.comment_marker,
            'id_lookback': self.id_lookback,
            'title_lookback': self.title_lookback,
            'attributes_lookback': self.attributes_lookback,
            'table_attribute_denylist': self.table_attribute_denylist,
            'image_attribute_names': self.image_attribute_names,
            'include_authors': self.include_authors
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=True)

    def validate(self) -> List[str]:
        """Validate the configuration and return any errors."""
        errors = []

        if not isinstance(self.comment_marker, str) or not self.comment_marker:
            errors.append("comment_marker must be a non-empty string")

        for name in ('id_lookback', 'title_lookback', 'attributes_lookback'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(f"{name} must be a non-negative integer, got {value!r}")

        for name in ('table_attribute_denylist', 'image_attribute_names'):
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                errors.append(f"{name} must be a list of strings")

        if not isinstance(self.include_authors, bool):
            errors.append(f"include_authors must be true or false, got {self.include_authors!r}")

        return errors
