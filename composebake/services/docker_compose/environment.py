"""
Build-argument resolution against compose environment sources.

Resolution order for an argument declared without a value:
    service environment → env_file contents → process environment

Values carrying `$NAME` / `${NAME}` references are interpolated from the
process environment snapshot only.
"""
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from dotenv import dotenv_values

from composebake.core.logger import get_logger
from composebake.models.compose import EnvFileRef
from composebake.models.errors import EnvFileError

logger = get_logger(__name__)

_REFERENCE = re.compile(
    r"""
    \$(?:
        (?P<escaped>\$)
      | \{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)(?:(?P<separator>:?-)(?P<default>[^}]*))?\}
      | (?P<named>[A-Za-z_][A-Za-z0-9_]*)
    )
    """,
    re.VERBOSE,
)


class EnvironmentResolver:
    """
    Resolves build arguments for one translation call.

    The process environment is passed in as a snapshot and never read from
    (or written to) `os.environ` here.

    Example:
        resolver = EnvironmentResolver({'FOO': 'bar'}, Path('/srv/app'))
        resolver.resolve_args({'FOO': None, 'TAG': '$FOO'}, {}, [])
        # {'FOO': 'bar', 'TAG': 'bar'}
    """

    def __init__(self, environ: Mapping[str, str], working_dir: Path,
                 encoding: str = "utf-8"):
        self.environ = dict(environ)
        self.working_dir = Path(working_dir)
        self.encoding = encoding

    def interpolate(self, value: str) -> str:
        """Substitute `$NAME`, `${NAME}`, `${NAME:-default}` and `${NAME-default}`.

        Unset names become the empty string; `$$` is a literal `$`.
        """
        if '$' not in value:
            return value
        return _REFERENCE.sub(self._substitute, value)

    def _substitute(self, match: re.Match) -> str:
        if match.group('escaped'):
            return '$'

        name = match.group('braced') or match.group('named')
        current = self.environ.get(name)
        separator = match.group('separator')

        if separator == ':-' and not current:
            return match.group('default')
        if separator == '-' and current is None:
            return match.group('default')
        return current or ''

    def resolve_args(self, args: Mapping[str, Optional[str]],
                     environment: Mapping[str, Optional[str]],
                     env_files: Sequence[EnvFileRef]) -> Dict[str, str]:
        """
        Produce the final argument map for a service.

        Args:
            args: Declared build args, already coerced to strings; None or ''
                marks an argument declared without a value
            environment: The service's `environment` entries (None = no value)
            env_files: The service's env_file references, in declaration order

        Returns:
            Argument map in declaration order; unresolved empty args are dropped

        Raises:
            EnvFileError: If a required env_file cannot be read or parsed
        """
        file_values = self.read_env_files(env_files)
        resolved = {}

        for key, value in args.items():
            if value:
                resolved[key] = self.interpolate(value)
                continue

            found = self._lookup(key, environment, file_values)
            if not found:
                logger.debug(f"Build arg {key} has no value in any source, dropping it")
                continue
            resolved[key] = found

        return resolved

    def _lookup(self, key: str, environment: Mapping[str, Optional[str]],
                file_values: Mapping[str, str]) -> Optional[str]:
        """First source with a non-empty value wins: environment, env_file, process env."""
        if environment.get(key):
            return self.interpolate(environment[key])
        if file_values.get(key):
            return file_values[key]
        return self.environ.get(key) or None

    def read_env_files(self, env_files: Sequence[EnvFileRef]) -> Dict[str, str]:
        """Read every env_file in order; later files override earlier ones."""
        values: Dict[str, str] = {}
        for ref in env_files:
            path = self._resolve_path(ref.path)
            if not ref.required and not path.exists():
                logger.warning(f"Optional env_file {path} not found, skipping")
                continue
            values.update(self.parse_env_file(path))
        return values

    def _resolve_path(self, path: str) -> Path:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.working_dir / candidate
        return candidate

    def parse_env_file(self, path: Path) -> Dict[str, str]:
        """
        Parse an env_file with python-dotenv.

        Bare `KEY` lines take their value from the process environment
        snapshot and are skipped when it does not define them.
        """
        try:
            with open(path, encoding=self.encoding) as f:
                parsed = dotenv_values(stream=f, interpolate=False)
        except OSError as e:
            raise EnvFileError(str(path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise EnvFileError(str(path), f"not valid {self.encoding} text") from e

        values: Dict[str, str] = {}
        for key, value in parsed.items():
            if value is None:
                value = self.environ.get(key)
                if value is None:
                    continue
            values[key] = value

        logger.debug(f"Read {len(values)} value(s) from env_file {path}")
        return values
