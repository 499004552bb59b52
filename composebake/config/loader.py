"""YAML/JSON compose loader producing the typed project tree."""
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from composebake.core.logger import get_logger
from composebake.models.compose import ComposeProject
from composebake.models.errors import ComposeDecodeError

logger = get_logger(__name__)


class ComposeLoader:
    """Decodes compose documents into ComposeProject trees."""

    def load(self, path: Union[str, Path]) -> ComposeProject:
        """Read and decode a compose file from disk."""
        compose_path = Path(path)
        try:
            data = compose_path.read_bytes()
        except OSError as e:
            raise ComposeDecodeError(f"Failed to read compose file {compose_path}: {e}") from e

        logger.debug(f"Loaded compose file: {compose_path}")
        return self.loads(data)

    def loads(self, data: Union[bytes, str]) -> ComposeProject:
        """
        Decode a YAML or JSON compose document.

        Args:
            data: Raw document bytes (or already-decoded text)

        Returns:
            ComposeProject with services in declaration order

        Raises:
            ComposeDecodeError: If the document is not valid YAML/JSON or
                does not have the compose shape
        """
        try:
            raw = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise ComposeDecodeError(f"Invalid compose file: {e}") from e

        if not isinstance(raw, dict):
            raise ComposeDecodeError("Invalid compose file: top level must be a mapping")

        if 'services' not in raw:
            raise ComposeDecodeError("Invalid compose file: no services section found")

        try:
            return ComposeProject.model_validate(raw)
        except ValidationError as e:
            raise ComposeDecodeError(f"Invalid compose file: {self._format_errors(e)}") from e

    def _format_errors(self, error: ValidationError) -> str:
        """Flatten pydantic errors into `services.web.build.args: message` lines."""
        parts = []
        for item in error.errors():
            location = ".".join(str(part) for part in item['loc'])
            parts.append(f"{location}: {item['msg']}")
        return "; ".join(parts)
