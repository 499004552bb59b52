"""Canonical bake model produced from a compose project."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Target:
    """One buildable unit derived from a compose service."""
    name: str
    context: Optional[str] = None
    dockerfile: Optional[str] = None
    target: Optional[str] = None  # Build stage
    args: Mapping[str, str] = field(default_factory=dict)
    labels: Mapping[str, str] = field(default_factory=dict)
    network_mode: Optional[str] = None
    tags: Tuple[str, ...] = ()
    platforms: Tuple[str, ...] = ()
    cache_from: Tuple[str, ...] = ()
    cache_to: Tuple[str, ...] = ()
    secrets: Tuple[str, ...] = ()
    ssh: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()
    pull: Optional[bool] = None
    no_cache: Optional[bool] = None

    def __post_init__(self):
        # Read-only views so a built target cannot be changed through its maps
        object.__setattr__(self, 'args', MappingProxyType(dict(self.args)))
        object.__setattr__(self, 'labels', MappingProxyType(dict(self.labels)))

    def to_dict(self) -> Dict[str, Any]:
        """Render in bake-file spelling, omitting unset and empty fields."""
        rendered = {
            'context': self.context,
            'dockerfile': self.dockerfile,
            'target': self.target,
            'args': dict(self.args),
            'labels': dict(self.labels),
            'network': self.network_mode,
            'tags': list(self.tags),
            'platforms': list(self.platforms),
            'cache-from': list(self.cache_from),
            'cache-to': list(self.cache_to),
            'secret': list(self.secrets),
            'ssh': list(self.ssh),
            'output': list(self.outputs),
            'pull': self.pull,
            'no-cache': self.no_cache,
        }
        return {key: value for key, value in rendered.items() if value not in (None, [], {})}


@dataclass(frozen=True)
class Group:
    """A named, ordered collection of target names."""
    name: str
    targets: Tuple[str, ...] = ()


@dataclass
class Project:
    """Whole translation result."""
    groups: List[Group] = field(default_factory=list)
    targets: List[Target] = field(default_factory=list)

    def get_target(self, name: str) -> Optional[Target]:
        """Look up a target by name."""
        for target in self.targets:
            if target.name == name:
                return target
        return None

    def to_dict(self) -> Dict[str, Any]:
        """
        Render as a bake definition.

        Returns:
            {
                'group': {'default': {'targets': ['db', 'webapp']}},
                'target': {'db': {'context': './db', ...}, ...}
            }
        """
        return {
            'group': {group.name: {'targets': list(group.targets)} for group in self.groups},
            'target': {target.name: target.to_dict() for target in self.targets},
        }
