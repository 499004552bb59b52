"""Typed compose project tree produced by the loader.

Only the fields that influence build targets are modelled. Everything else
a compose file may carry (ports, healthcheck, depends_on, ...) is accepted
as an extra field and left alone.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)

# Decoded scalar as it arrives from YAML: string, number, boolean or null.
ScalarValue = Optional[Union[StrictBool, StrictInt, StrictFloat, StrictStr]]


def _as_list(value: Any) -> Any:
    """Accept a single string wherever a list of strings is expected."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


def _as_mapping(value: Any) -> Any:
    """Normalize the compose `KEY=VALUE` list form into a mapping.

    A bare `KEY` list entry maps to None (declared without a value).
    """
    if value is None:
        return {}
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    if isinstance(value, list):
        mapping = {}
        for entry in value:
            if not isinstance(entry, str):
                raise ValueError(f"expected KEY=VALUE string, got {entry!r}")
            if '=' in entry:
                key, item = entry.split('=', 1)
                mapping[key] = item
            else:
                mapping[entry] = None
        return mapping
    return value


class EnvFileRef(BaseModel):
    """One env_file entry of a service."""

    model_config = ConfigDict(extra='ignore')

    path: str
    required: bool = True


class BuildSpec(BaseModel):
    """The `build` section of a service.

    Extension blocks (any `x-*` key) are kept in `model_extra`.
    """

    model_config = ConfigDict(extra='allow')

    context: Optional[str] = None
    dockerfile: Optional[str] = None
    target: Optional[str] = None
    args: Dict[str, ScalarValue] = Field(default_factory=dict)
    network: Optional[str] = None
    secrets: List[str] = Field(default_factory=list)
    ssh: List[str] = Field(default_factory=list)
    cache_from: List[str] = Field(default_factory=list)
    cache_to: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    platforms: List[str] = Field(default_factory=list)
    labels: Dict[str, ScalarValue] = Field(default_factory=dict)
    pull: Optional[bool] = None
    no_cache: Optional[bool] = None

    @field_validator('args', 'labels', mode='before')
    @classmethod
    def normalize_mapping(cls, v):
        return _as_mapping(v)

    @field_validator('cache_from', 'cache_to', 'tags', 'platforms', mode='before')
    @classmethod
    def normalize_list(cls, v):
        return _as_list(v)

    @field_validator('secrets', mode='before')
    @classmethod
    def normalize_secrets(cls, v):
        """Accept short (`token`) and long (`{source: token}`) secret refs."""
        names = []
        for entry in _as_list(v):
            if isinstance(entry, dict):
                if 'source' not in entry:
                    raise ValueError(f"secret reference {entry!r} has no source")
                names.append(entry['source'])
            else:
                names.append(entry)
        return names

    @field_validator('ssh', mode='before')
    @classmethod
    def normalize_ssh(cls, v):
        """Render `{id: path}` mappings as `id=path`; bare ids stay bare."""
        if isinstance(v, dict):
            return [f"{key}={path}" if path else str(key) for key, path in v.items()]
        return _as_list(v)

    def extension(self, key: str) -> Any:
        """Return the raw extension block stored under `key`, if any."""
        return (self.model_extra or {}).get(key)


class ServiceSpec(BaseModel):
    """One entry of the top-level `services` mapping."""

    model_config = ConfigDict(extra='allow')

    image: Optional[str] = None
    build: Optional[BuildSpec] = None
    environment: Dict[str, ScalarValue] = Field(default_factory=dict)
    env_file: List[EnvFileRef] = Field(default_factory=list)

    @field_validator('build', mode='before')
    @classmethod
    def normalize_build(cls, v):
        """`build: ./dir` is shorthand for `build: {context: ./dir}`."""
        if isinstance(v, str):
            return {'context': v}
        if v == {}:
            return None
        return v

    @field_validator('environment', mode='before')
    @classmethod
    def normalize_environment(cls, v):
        return _as_mapping(v)

    @field_validator('env_file', mode='before')
    @classmethod
    def normalize_env_file(cls, v):
        return [{'path': entry} if isinstance(entry, str) else entry for entry in _as_list(v)]


class SecretSpec(BaseModel):
    """A top-level secret definition."""

    model_config = ConfigDict(extra='allow')

    name: Optional[str] = None
    file: Optional[str] = None
    environment: Optional[str] = None
    external: Optional[Any] = None


class ComposeProject(BaseModel):
    """A decoded compose document."""

    model_config = ConfigDict(extra='allow')

    version: Optional[Union[StrictStr, StrictInt, StrictFloat]] = None
    name: Optional[str] = None
    services: Dict[str, ServiceSpec]
    networks: Dict[str, Any] = Field(default_factory=dict)
    secrets: Dict[str, SecretSpec] = Field(default_factory=dict)

    @field_validator('services', 'networks', 'secrets', mode='before')
    @classmethod
    def normalize_sections(cls, v):
        """Stringify keys and treat a null body as an empty definition."""
        if not isinstance(v, dict):
            return {} if v is None else v
        return {str(key): ({} if body is None else body) for key, body in v.items()}

    def service_names(self) -> List[str]:
        """Service names in declaration order."""
        return list(self.services)
