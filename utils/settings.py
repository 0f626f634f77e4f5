"""
Deployment Settings
Loads .env and config/deploy_config.json
"""

import os
import json
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from blockchain.errors import DeployError

DEFAULT_CONFIG_PATH = 'config/deploy_config.json'
DEFAULT_RPC_URL = 'http://127.0.0.1:8545'


@dataclass
class DeploySettings:
    """Resolved settings for one deployment run"""

    blueprint: str = 'KYCVerification'
    artifacts_dir: str = 'artifacts'
    rpc_url: str = DEFAULT_RPC_URL
    private_key: Optional[str] = None
    receipt_timeout: Optional[float] = None
    poll_latency: float = 0.1
    request_timeout: float = 30
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'DeploySettings':
        """
        Load settings from .env, the environment and the JSON config

        Environment values win over the JSON file. A missing JSON file
        falls back to the defaults.

        Args:
            config_path: JSON config path (default: DEPLOY_CONFIG_PATH or
                config/deploy_config.json)

        Raises:
            DeployError: on malformed config or invalid values
        """
        load_dotenv()

        config_path = config_path or os.getenv('DEPLOY_CONFIG_PATH', DEFAULT_CONFIG_PATH)
        config = _read_config(config_path)
        logging_config = config.get('logging') or {}

        return cls(
            blueprint=str(os.getenv('DEPLOY_BLUEPRINT') or config.get('blueprint') or cls.blueprint).strip(),
            artifacts_dir=config.get('artifacts_dir', cls.artifacts_dir),
            rpc_url=os.getenv('DEPLOY_RPC_URL') or DEFAULT_RPC_URL,
            private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
            receipt_timeout=_optional_positive(config, 'receipt_timeout_seconds'),
            poll_latency=_positive(config, 'poll_latency_seconds', cls.poll_latency),
            request_timeout=_positive(config, 'request_timeout_seconds', cls.request_timeout),
            log_level=_log_level(os.getenv('DEPLOY_LOG_LEVEL') or logging_config.get('level') or cls.log_level),
            log_file=logging_config.get('file')
        )


def _read_config(config_path: str) -> Dict:
    if not os.path.exists(config_path):
        return {}

    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        raise DeployError(f"Invalid config file {config_path}: {e}", stage='config', cause=e)

    if not isinstance(config, dict):
        raise DeployError(f"Invalid config file {config_path}: expected an object", stage='config')

    return config


def _positive(config: Dict, key: str, default: float) -> float:
    value = config.get(key, default)

    try:
        value = float(value)
    except (TypeError, ValueError):
        raise DeployError(f"{key} must be a number, got {value!r}", stage='config')

    if value <= 0:
        raise DeployError(f"{key} must be positive, got {value}", stage='config')

    return value


def _optional_positive(config: Dict, key: str) -> Optional[float]:
    # Absent or null means the client waits without a deadline
    if config.get(key) is None:
        return None
    return _positive(config, key, None)


def _log_level(name) -> str:
    level = str(name).strip().upper()

    try:
        logger.level(level)
    except ValueError:
        raise DeployError(f"Unknown log level {name!r}", stage='config')

    return level
