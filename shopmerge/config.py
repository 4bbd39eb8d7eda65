"""
Configuration for the shop aggregation service.

Defaults mirror the production upstreams. An optional YAML file can override
any nested key; the listen port comes from the PORT environment variable.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

from .core.exceptions import ConfigurationError

# Pick up PORT from a local .env without overriding the real environment
load_dotenv()

DEFAULT_PORT = 8080
DEFAULT_CONFIG_PATH = Path('config/config.yaml')

DEFAULT_CONFIG: Dict[str, Any] = {
    'server': {
        'host': '0.0.0.0',
    },
    'http': {
        # Upstream certificates are not verified unless enabled here
        'verify_tls': False,
        'timeout': None,
        'user_agent': 'shopmerge/0.1.0',
    },
    'sources': {
        'sasonlineshopping': {
            'api_url': (
                'https://onlineshopping.loyaltykey.com/api/v1/shops'
                '?filter[channel]=SAS&filter[language]=nb&filter[country]=NO'
                '&filter[amount]=5000&filter[compressed]=true'
            ),
            'store_base_url': 'https://onlineshopping.flysas.com/nb-NO/butikker',
        },
        'trumfnetthandel': {
            'page_url': 'https://trumfnetthandel.no/category/paged/all/999/0/popularity/',
            'cashback_base_url': 'https://trumfnetthandel.no/cashback',
        },
    },
    'logging': {
        'level': 'INFO',
    },
}


def get_port() -> int:
    """
    Resolve the listen port from the PORT environment variable.

    Returns:
        Port number, DEFAULT_PORT when PORT is unset or empty
    """
    value = os.getenv('PORT')
    if value is None or value.strip() == '':
        return DEFAULT_PORT
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid PORT value: {value!r}") from e


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration, applying YAML overrides on top of DEFAULT_CONFIG.

    Args:
        path: YAML file to read. When omitted, config/config.yaml is used
            if it exists.

    Returns:
        Fully populated configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return config
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            overrides = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if overrides is None:
        return config
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    return _deep_merge(config, overrides)
