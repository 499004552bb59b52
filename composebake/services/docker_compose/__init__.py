"""
Docker Compose translation services.

Provides the pieces that turn a compose project into bake targets and groups.
"""

from .environment import EnvironmentResolver
from .extension import ExtensionMerger
from .groups import GroupBuilder
from .secrets import SecretDirectiveBuilder
from .targets import TargetBuilder, coerce_scalar
from .translator import ComposeTranslator, parse_compose

__all__ = [
    "EnvironmentResolver",
    "ExtensionMerger",
    "GroupBuilder",
    "SecretDirectiveBuilder",
    "TargetBuilder",
    "coerce_scalar",
    "ComposeTranslator",
    "parse_compose",
]
