"""Secret and SSH directive strings for build targets."""
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from composebake.models.compose import SecretSpec
from composebake.models.errors import UnresolvedSecretError

DEFAULT_SSH_ID = "default"


class SecretDirectiveBuilder:
    """
    Turns named secret/ssh references into bake directive strings.

    Examples:
        token (environment: ENV_TOKEN)      → id=token,env=ENV_TOKEN
        aws (file: /root/.aws/credentials)  → id=aws,src=/root/.aws/credentials
    """

    def __init__(self, definitions: Mapping[str, SecretSpec],
                 working_dir: Optional[Path] = None):
        self.definitions = definitions
        self.working_dir = working_dir

    def build_secrets(self, service: str, references: Sequence[str]) -> List[str]:
        """Build one directive per reference, in declaration order.

        Raises:
            UnresolvedSecretError: If a reference has no usable definition
        """
        directives = []
        for name in references:
            definition = self.definitions.get(name)
            if definition is None:
                raise UnresolvedSecretError(service, name)

            if definition.environment:
                directives.append(f"id={name},env={definition.environment}")
            elif definition.file:
                directives.append(f"id={name},src={self._resolve_file(definition.file)}")
            else:
                raise UnresolvedSecretError(
                    service, name, "has neither an environment nor a file source"
                )
        return directives

    def build_ssh(self, references: Sequence[str]) -> List[str]:
        """SSH references pass through; an empty entry means the default agent."""
        return [reference or DEFAULT_SSH_ID for reference in references]

    def _resolve_file(self, path: str) -> str:
        if self.working_dir is None or Path(path).is_absolute():
            return path
        return str(self.working_dir / path)
