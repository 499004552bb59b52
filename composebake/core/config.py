"""composebake runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class BakeConfig:
    """Runtime configuration for compose translation.

    Attributes:
        extension_key: Build-spec key carrying bake-only fields (default: x-bake)
        default_group: Name of the group collecting every target (default: default)
        env_file_encoding: Encoding used to read env_file contents (default: utf-8)
    """

    extension_key: str = "x-bake"
    default_group: str = "default"
    env_file_encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> "BakeConfig":
        """Create config from environment variables.

        Environment variables:
            COMPOSEBAKE_EXTENSION_KEY: Extension block key on build specs
            COMPOSEBAKE_DEFAULT_GROUP: Name of the implicit group
            COMPOSEBAKE_ENV_FILE_ENCODING: Encoding for env_file reads

        Returns:
            BakeConfig instance with values from environment or defaults
        """
        return cls(
            extension_key=os.getenv("COMPOSEBAKE_EXTENSION_KEY", cls.extension_key),
            default_group=os.getenv("COMPOSEBAKE_DEFAULT_GROUP", cls.default_group),
            env_file_encoding=os.getenv(
                "COMPOSEBAKE_ENV_FILE_ENCODING", cls.env_file_encoding
            ),
        )


# Global config instance (can be overridden)
_config: Optional[BakeConfig] = None


def get_config() -> BakeConfig:
    """Get global configuration instance.

    Returns:
        Global BakeConfig instance (created from environment on first call)
    """
    global _config
    if _config is None:
        _config = BakeConfig.from_env()
    return _config


def set_config(config: BakeConfig) -> None:
    """Set global configuration instance (mainly for testing).

    Args:
        config: BakeConfig instance to use globally
    """
    global _config
    _config = config
