"""Data models for composebake."""
from composebake.models.bake import Group, Project, Target
from composebake.models.compose import (
    BuildSpec,
    ComposeProject,
    EnvFileRef,
    ScalarValue,
    SecretSpec,
    ServiceSpec,
)
from composebake.models.errors import (
    ComposeDecodeError,
    ComposeError,
    EnvFileError,
    InvalidComposeProjectError,
    InvalidServiceNameError,
    MissingBuildSpecError,
    UnresolvedSecretError,
)

__all__ = [
    'Group',
    'Project',
    'Target',
    'BuildSpec',
    'ComposeProject',
    'EnvFileRef',
    'ScalarValue',
    'SecretSpec',
    'ServiceSpec',
    'ComposeDecodeError',
    'ComposeError',
    'EnvFileError',
    'InvalidComposeProjectError',
    'InvalidServiceNameError',
    'MissingBuildSpecError',
    'UnresolvedSecretError',
]
