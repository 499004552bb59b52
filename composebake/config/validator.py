"""Project-wide validation of translated targets."""
import re
from typing import List, Sequence

from composebake.core.logger import get_logger
from composebake.models.bake import Target
from composebake.models.errors import (
    InvalidComposeProjectError,
    InvalidServiceNameError,
    MissingBuildSpecError,
)

logger = get_logger(__name__)

# Letters, digits and underscore first; hyphens allowed afterwards. No dots.
SERVICE_NAME_PATTERN = re.compile(r'[a-zA-Z0-9_][a-zA-Z0-9_-]*')


class ProjectValidator:
    """Validates the translated target set as a whole."""

    def validate(self, targets: Sequence[Target], missing_build: Sequence[str] = ()) -> None:
        """Validate every target and the services that produced none.

        Args:
            targets: Targets built from the project, in declaration order
            missing_build: Services with neither an image nor a build section

        Raises:
            MissingBuildSpecError: If any service lacks both image and build
            InvalidServiceNameError: If any target name is not allowed
            InvalidComposeProjectError: If target names are duplicated
        """
        missing_errors = [
            f'service "{name}" has neither an image nor a build context specified'
            for name in missing_build
        ]

        bad_names = []
        name_errors = []
        for target in targets:
            errors = self._validate_name(target.name)
            if errors:
                bad_names.append(target.name)
                name_errors.extend(errors)

        duplicate_errors = self._check_duplicates(targets)

        if missing_errors:
            raise MissingBuildSpecError(
                missing_errors + name_errors + duplicate_errors, list(missing_build)
            )
        if name_errors:
            raise InvalidServiceNameError(name_errors + duplicate_errors, bad_names)
        if duplicate_errors:
            raise InvalidComposeProjectError(duplicate_errors)

        logger.debug(f"Validated {len(targets)} target(s)")

    def _validate_name(self, name: str) -> List[str]:
        """Validate a target name against the service naming rule."""
        if not name:
            return ["target name cannot be empty"]

        if not SERVICE_NAME_PATTERN.fullmatch(name):
            if name[0] == '-':
                reason = "must start with a letter, digit or underscore"
            else:
                invalid = sorted(set(re.sub(r'[a-zA-Z0-9_-]', '', name)))
                reason = f"contains invalid characters: {''.join(invalid)}"
            return [f'invalid service name "{name}": {reason}']

        return []

    def _check_duplicates(self, targets: Sequence[Target]) -> List[str]:
        seen = set()
        errors = []
        for target in targets:
            if target.name in seen:
                errors.append(f'duplicate target name "{target.name}"')
            seen.add(target.name)
        return errors
