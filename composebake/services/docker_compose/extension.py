"""
Extension block merger for bake-only build fields.

Compose has no place for several build-tool options, so they ride along in
a vendor block on the build spec:

    build:
      context: .
      x-bake:
        tags: [app:latest]
        platforms: linux/arm64
        cache-to: type=local,dest=path/to/cache
        pull: true

Every recognized field overlays the canonical target: list fields are
appended after the compose values, flags are only set when compose left
them unset.
"""
from typing import Any, Dict, List, Optional

from composebake.core.logger import get_logger
from composebake.models.errors import ComposeDecodeError

logger = get_logger(__name__)

# Extension key -> Target field
LIST_FIELDS = {
    'tags': 'tags',
    'platforms': 'platforms',
    'cache-from': 'cache_from',
    'cache-to': 'cache_to',
    'secret': 'secrets',
    'ssh': 'ssh',
    'output': 'outputs',
}

FLAG_FIELDS = {
    'pull': 'pull',
    'no-cache': 'no_cache',
}


class ExtensionMerger:
    """
    Merges an extension block into a target under construction.

    Input:
    - Target fields built from the compose service (a plain dict)
    - The raw extension block from the build spec

    Output:
    - The same dict, overlaid with the extension values
    """

    def __init__(self, extension_key: str = "x-bake"):
        self.extension_key = extension_key

    def merge(self, service: str, fields: Dict[str, Any], extension: Any) -> Dict[str, Any]:
        """
        Overlay extension values onto target fields.

        Args:
            service: Service name (for error messages)
            fields: Target keyword arguments built so far; list values are lists
            extension: Raw extension block, or None

        Returns:
            The updated fields dict

        Raises:
            ComposeDecodeError: If the block or one of its values has the wrong type
        """
        if extension is None:
            return fields

        if not isinstance(extension, dict):
            raise ComposeDecodeError(
                f'service "{service}": {self.extension_key} must be a mapping, '
                f'got {type(extension).__name__}'
            )

        for key, value in extension.items():
            if key in LIST_FIELDS:
                target_field = LIST_FIELDS[key]
                fields.setdefault(target_field, [])
                fields[target_field].extend(self._string_list(service, key, value))
            elif key in FLAG_FIELDS:
                target_field = FLAG_FIELDS[key]
                flag = self._flag(service, key, value)
                if fields.get(target_field) is None:
                    fields[target_field] = flag
            else:
                logger.warning(
                    f'service "{service}": ignoring unknown {self.extension_key} field "{key}"'
                )

        return fields

    def _string_list(self, service: str, key: str, value: Any) -> List[str]:
        """Accept a single string or a list of strings."""
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
        raise ComposeDecodeError(
            f'service "{service}": {self.extension_key}.{key} must be a string or a list of strings'
        )

    def _flag(self, service: str, key: str, value: Any) -> Optional[bool]:
        if value is None or isinstance(value, bool):
            return value
        raise ComposeDecodeError(
            f'service "{service}": {self.extension_key}.{key} must be a boolean'
        )
