import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import yaml
from pymonad.either import Either, Left, Right

from .domain.errors import ConfigError
from .tubearchivist_api import DEFAULT_PAGE_SIZE, DEFAULT_TIMEOUT
from .urls import normalize_base_url

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "tubearchivist.yml"

ENV_BASE_URL = "TA_BASE_URL"
ENV_TOKEN = "TA_TOKEN"
ENV_TIMEOUT = "TA_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    """Connection settings of the archive.

    Attributes:
        base_url: Root URL of the TubeArchivist instance.
        token: API token, sent as ``Authorization: Token <token>``.
        timeout: Per-request timeout in seconds.
        page_size: Default page size for listings.
    """

    base_url: str
    token: str
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE

    def __repr__(self) -> str:
        return (
            f"Settings(base_url={self.base_url!r}, token='***', "
            f"timeout={self.timeout!r}, page_size={self.page_size!r})"
        )


def load_settings(
    config_file: str = DEFAULT_CONFIG_FILE, env: Optional[Mapping[str, str]] = None
) -> Either[ConfigError, Settings]:
    """
    Loads the archive settings from a YAML file and the environment.

    Environment variables (TA_BASE_URL, TA_TOKEN, TA_TIMEOUT) take precedence
    over the file. The file is optional when the environment is complete.

    Args:
        config_file: Path to the YAML configuration file.
        env: Environment mapping, os.environ when omitted.

    Returns:
        Either: A Right(Settings) or a Left(ConfigError).
    """
    env = os.environ if env is None else env
    values = {}

    if os.path.exists(config_file):
        logger.info(f"Configuration file '{config_file}' found.")
        try:
            with open(config_file, "r", encoding="utf-8") as file:
                data = yaml.safe_load(file) or {}
        except (yaml.YAMLError, OSError) as e:
            logger.error(f"Error reading configuration file: {e}")
            return Left(ConfigError(f"Could not read '{config_file}': {e}"))
        if not isinstance(data, dict):
            logger.error(f"Configuration file '{config_file}' is not a mapping.")
            return Left(ConfigError(f"'{config_file}' must contain a mapping of settings."))
        values.update(data)
    else:
        logger.info(f"Configuration file '{config_file}' not found, using the environment only.")

    overrides = {ENV_BASE_URL: "base_url", ENV_TOKEN: "token", ENV_TIMEOUT: "timeout"}
    for variable, key in overrides.items():
        if env.get(variable):
            values[key] = env[variable]

    base_url = str(values.get("base_url") or "").strip()
    token = str(values.get("token") or "").strip()

    if not base_url:
        return Left(ConfigError(f"No archive URL configured. Set 'base_url' in '{config_file}' or {ENV_BASE_URL}."))
    if not base_url.startswith(("http://", "https://")):
        return Left(ConfigError(f"Archive URL must start with http:// or https://, got '{base_url}'."))
    if not token:
        return Left(ConfigError(f"No API token configured. Set 'token' in '{config_file}' or {ENV_TOKEN}."))

    try:
        timeout = float(values.get("timeout", DEFAULT_TIMEOUT))
        page_size = int(values.get("page_size", DEFAULT_PAGE_SIZE))
    except (TypeError, ValueError) as e:
        return Left(ConfigError(f"Invalid numeric setting: {e}"))
    if timeout <= 0 or page_size <= 0:
        return Left(ConfigError("timeout and page_size must be positive."))

    settings = Settings(
        base_url=normalize_base_url(base_url),
        token=token,
        timeout=timeout,
        page_size=page_size,
    )
    logger.info(f"Archive settings loaded for {settings.base_url}.")
    return Right(settings)
