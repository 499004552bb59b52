"""Exceptions raised while translating a compose project."""
from typing import List


class ComposeError(Exception):
    """Base class for every translation failure."""


class ComposeDecodeError(ComposeError):
    """Input is not valid YAML/JSON or does not have the compose shape."""


class EnvFileError(ComposeError):
    """A referenced env_file cannot be opened, read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"env_file {path}: {reason}")


class UnresolvedSecretError(ComposeError):
    """A build secret reference has no usable top-level definition."""

    def __init__(self, service: str, secret: str, reason: str = "is not defined"):
        self.service = service
        self.secret = secret
        super().__init__(f'service "{service}" refers to secret "{secret}" which {reason}')


class InvalidComposeProjectError(ComposeError):
    """Aggregated validation failure across the whole project.

    Attributes:
        problems: One message per offending service, in declaration order
    """

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) + ": invalid compose project")


class MissingBuildSpecError(InvalidComposeProjectError):
    """One or more services have neither an image nor a build section."""

    def __init__(self, problems: List[str], services: List[str]):
        self.services = list(services)
        super().__init__(problems)


class InvalidServiceNameError(InvalidComposeProjectError):
    """One or more target names break the service naming rule."""

    def __init__(self, problems: List[str], names: List[str]):
        self.names = list(names)
        super().__init__(problems)
