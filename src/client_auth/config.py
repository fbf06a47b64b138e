"""Client authentication configuration from YAML file.

Loads from config/client_auth.yaml:
- oauth2: token endpoint, client credentials and expiration policy
- signing: SigV4 scope and optional static keys

Environment variables ARE supported using ${VAR_NAME} and
${VAR_NAME:-default} syntax in YAML files. OAUTH2_TOKEN_ENDPOINT,
OAUTH2_CLIENT_ID and OAUTH2_CLIENT_SECRET override the file values.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from client_auth.oauth2.models import (
    DEFAULT_ACCESS_TOKEN_LIFESPAN,
    DEFAULT_REFRESH_SAFETY_WINDOW,
    DEFAULT_REFRESH_TOKEN_LIFESPAN,
    OAuth2ClientConfig,
)
from client_auth.signing.credentials import (
    BotocoreCredentialsProvider,
    CredentialsProvider,
    StaticCredentialsProvider,
)
from client_auth.signing.models import SigningScope

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).parent.parent.parent / "config" / "client_auth.yaml"

DEFAULT_SIGNING_SERVICE = "execute-api"
DEFAULT_SIGNING_REGION = "us-west-2"


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} and ${VAR_NAME:-default} environment variables."""
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        pattern = r"\$\{([^}:]+)(?::-(([^}]*))?)?\}"

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else match.group(0)
            return os.getenv(var_name, default_value)

        return re.sub(pattern, replacer, data)
    else:
        return data


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _seconds(section: Dict[str, Any], key: str, default: timedelta) -> timedelta:
    value = section.get(key)
    if value is None or value == "":
        return default
    try:
        return timedelta(seconds=float(value))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{key} must be a number of seconds, got {value!r}") from e


@dataclass
class SigningConfig:
    """SigV4 signing configuration.

    When access_key_id/secret_access_key are empty, credentials come from
    botocore's default chain (optionally a named profile).
    """

    service: str = DEFAULT_SIGNING_SERVICE
    region: str = DEFAULT_SIGNING_REGION
    access_key_id: str = ""
    secret_access_key: str = ""
    session_token: str = ""
    profile: str = ""

    @property
    def scope(self) -> SigningScope:
        return SigningScope(service=self.service, region=self.region)


@dataclass
class ClientAuthConfig:
    """Top-level configuration: OAuth2 client and/or request signing."""

    oauth2: Optional[OAuth2ClientConfig] = None
    signing: SigningConfig = field(default_factory=SigningConfig)

    def validate(self) -> None:
        """
        Validate configuration.

        Raises:
            ValueError: With an actionable message for the first problem found
        """
        if self.oauth2 is not None:
            if not self.oauth2.token_endpoint:
                raise ValueError("oauth2.token_endpoint is required (or set OAUTH2_TOKEN_ENDPOINT)")
            if not self.oauth2.client_id:
                raise ValueError("oauth2.client_id is required (or set OAUTH2_CLIENT_ID)")
            if not self.oauth2.token_endpoint.startswith(("https://", "http://")):
                raise ValueError(
                    f"oauth2.token_endpoint must be an http(s) URL, got {self.oauth2.token_endpoint!r}"
                )
            for name in (
                "default_access_token_lifespan",
                "default_refresh_token_lifespan",
                "refresh_safety_window",
            ):
                if getattr(self.oauth2, name) < timedelta(0):
                    raise ValueError(f"oauth2.{name}_seconds must not be negative")

        if not self.signing.service or not self.signing.region:
            raise ValueError("signing.service and signing.region must not be empty")
        if bool(self.signing.access_key_id) != bool(self.signing.secret_access_key):
            raise ValueError(
                "signing.access_key_id and signing.secret_access_key must be set together"
            )


def _build_oauth2(section: Dict[str, Any]) -> Optional[OAuth2ClientConfig]:
    token_endpoint = os.getenv("OAUTH2_TOKEN_ENDPOINT") or section.get("token_endpoint", "")
    client_id = os.getenv("OAUTH2_CLIENT_ID") or section.get("client_id", "")
    if not section and not token_endpoint and not client_id:
        return None

    client_secret = os.getenv("OAUTH2_CLIENT_SECRET") or section.get("client_secret") or None
    if client_secret:
        logger.info("OAuth2 confidential client authentication configured")
    else:
        logger.info("OAuth2 public client (no client secret) configured")

    timeout = section.get("timeout_seconds", 30)
    return OAuth2ClientConfig(
        token_endpoint=token_endpoint,
        client_id=client_id,
        client_secret=client_secret,
        client_name=section.get("client_name", "default"),
        scope=section.get("scope") or None,
        default_access_token_lifespan=_seconds(
            section, "default_access_token_lifespan_seconds", DEFAULT_ACCESS_TOKEN_LIFESPAN
        ),
        default_refresh_token_lifespan=_seconds(
            section, "default_refresh_token_lifespan_seconds", DEFAULT_REFRESH_TOKEN_LIFESPAN
        ),
        refresh_safety_window=_seconds(
            section, "refresh_safety_window_seconds", DEFAULT_REFRESH_SAFETY_WINDOW
        ),
        timeout_seconds=float(timeout) if timeout is not None else None,
        extra_params=dict(section.get("extra_params") or {}),
    )


def _build_signing(section: Dict[str, Any]) -> SigningConfig:
    return SigningConfig(
        service=section.get("service") or DEFAULT_SIGNING_SERVICE,
        region=section.get("region") or DEFAULT_SIGNING_REGION,
        access_key_id=section.get("access_key_id") or "",
        secret_access_key=section.get("secret_access_key") or "",
        session_token=section.get("session_token") or "",
        profile=section.get("profile") or "",
    )


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ClientAuthConfig:
    """Load client authentication configuration from a YAML file.

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If the configuration is invalid
    """
    if config_path is None:
        config_path = Path(os.getenv("CLIENT_AUTH_CONFIG", str(DEFAULT_CONFIG_FILE)))

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"See config/client_auth.yaml.example for the expected structure"
        )

    logger.info(f"Loading configuration from file: {config_path}")
    yaml_data = _expand_env_vars(load_yaml(config_path))

    if overrides:
        logger.debug(f"Applying overrides: {list(overrides.keys())}")
        yaml_data = _deep_merge(yaml_data, overrides)

    config = ClientAuthConfig(
        oauth2=_build_oauth2(yaml_data.get("oauth2") or {}),
        signing=_build_signing(yaml_data.get("signing") or {}),
    )

    logger.debug("Validating configuration...")
    config.validate()
    logger.debug("Configuration validation passed")

    return config


def credentials_provider_from_config(signing: SigningConfig) -> CredentialsProvider:
    """Static keys when configured, otherwise botocore's default chain."""
    if signing.access_key_id:
        return StaticCredentialsProvider(
            signing.access_key_id,
            signing.secret_access_key,
            signing.session_token or None,
        )
    return BotocoreCredentialsProvider(profile=signing.profile or None)


_client_auth_config: Optional[ClientAuthConfig] = None


def get_config() -> ClientAuthConfig:
    """Get or load the singleton config instance."""
    global _client_auth_config
    if _client_auth_config is None:
        _client_auth_config = load_config()
    return _client_auth_config


def set_config(config: ClientAuthConfig) -> None:
    """Set the singleton config instance (useful for testing)."""
    global _client_auth_config
    _client_auth_config = config


def reset_config() -> None:
    """Reset the singleton config instance (forces reload on next get_config() call)."""
    global _client_auth_config
    _client_auth_config = None


__all__ = [
    "ClientAuthConfig",
    "SigningConfig",
    "load_config",
    "get_config",
    "set_config",
    "reset_config",
    "credentials_provider_from_config",
    "DEFAULT_CONFIG_FILE",
]
