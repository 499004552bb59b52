"""
Compose → bake translation entry point.

Pipeline:
    decoded project → TargetBuilder → ProjectValidator → GroupBuilder → Project

Example:
    project = parse_compose(Path('docker-compose.yml').read_bytes())
    for target in project.targets:
        print(target.name, target.tags)
"""
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from composebake.config.loader import ComposeLoader
from composebake.config.validator import ProjectValidator
from composebake.core.config import BakeConfig, get_config
from composebake.core.logger import get_logger
from composebake.models.bake import Project
from composebake.models.compose import ComposeProject

from .environment import EnvironmentResolver
from .extension import ExtensionMerger
from .groups import GroupBuilder
from .secrets import SecretDirectiveBuilder
from .targets import TargetBuilder

logger = get_logger(__name__)


class ComposeTranslator:
    """
    Translates decoded compose projects into canonical bake projects.

    The translator holds configuration only; every call builds its own
    resolver from the environment snapshot it is given.
    """

    def __init__(self, config: Optional[BakeConfig] = None):
        self.config = config or get_config()
        self.loader = ComposeLoader()
        self.validator = ProjectValidator()
        self.groups = GroupBuilder(self.config.default_group)

    def translate(self, compose: ComposeProject,
                  environ: Optional[Mapping[str, str]] = None,
                  working_dir: Optional[Union[str, Path]] = None) -> Project:
        """
        Translate a decoded compose project.

        Args:
            compose: Decoded compose tree
            environ: Process environment snapshot (defaults to a copy of os.environ)
            working_dir: Base for relative env_file and secret paths (defaults to cwd)

        Returns:
            Project with the default group and one target per buildable service

        Raises:
            ComposeError: Any translation failure; nothing is returned partially
        """
        environ = dict(os.environ) if environ is None else dict(environ)
        base_dir = Path(working_dir) if working_dir is not None else Path.cwd()

        resolver = EnvironmentResolver(environ, base_dir, self.config.env_file_encoding)
        directives = SecretDirectiveBuilder(compose.secrets, base_dir)
        merger = ExtensionMerger(self.config.extension_key)
        builder = TargetBuilder(resolver, directives, merger)

        targets, missing = builder.build(compose)
        self.validator.validate(targets, missing)

        project = Project(groups=self.groups.build(targets), targets=targets)
        logger.debug(
            f"Translated {len(compose.services)} service(s) into {len(targets)} target(s)"
        )
        return project

    def translate_bytes(self, data: Union[bytes, str],
                        environ: Optional[Mapping[str, str]] = None,
                        working_dir: Optional[Union[str, Path]] = None) -> Project:
        """Decode a YAML/JSON document and translate it."""
        return self.translate(self.loader.loads(data), environ, working_dir)

    def translate_file(self, path: Union[str, Path],
                       environ: Optional[Mapping[str, str]] = None,
                       working_dir: Optional[Union[str, Path]] = None) -> Project:
        """Load a compose file and translate it.

        Relative paths resolve against the file's directory unless
        `working_dir` is given.
        """
        compose_path = Path(path)
        if working_dir is None:
            working_dir = compose_path.resolve().parent
        return self.translate(self.loader.load(compose_path), environ, working_dir)


def parse_compose(data: Union[bytes, str],
                  environ: Optional[Mapping[str, str]] = None,
                  working_dir: Optional[Union[str, Path]] = None,
                  config: Optional[BakeConfig] = None) -> Project:
    """Decode and translate a compose document in one call."""
    return ComposeTranslator(config).translate_bytes(data, environ, working_dir)
