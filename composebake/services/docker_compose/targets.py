"""Target construction from compose services."""
from typing import Any, Dict, List, Optional, Tuple

from composebake.core.logger import get_logger
from composebake.models.bake import Target
from composebake.models.compose import ComposeProject, ScalarValue, ServiceSpec

from .environment import EnvironmentResolver
from .extension import ExtensionMerger
from .secrets import SecretDirectiveBuilder

logger = get_logger(__name__)


def coerce_scalar(value: ScalarValue) -> Optional[str]:
    """
    Coerce a decoded scalar to its build-argument string.

    Examples:
        123 → "123"
        1.0 → "1"
        True → "true"
        None → None (declared without a value)
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class TargetBuilder:
    """
    Builds canonical targets for every service of a project.

    Only services with a build section produce a target. Services with just
    an image are skipped; services with neither are reported back so the
    validator can fail the whole project.
    """

    def __init__(self, resolver: EnvironmentResolver, directives: SecretDirectiveBuilder,
                 merger: ExtensionMerger):
        self.resolver = resolver
        self.directives = directives
        self.merger = merger

    def build(self, project: ComposeProject) -> Tuple[List[Target], List[str]]:
        """
        Build targets in service declaration order.

        Returns:
            (targets, services with neither an image nor a build section)
        """
        targets = []
        missing = []

        for name in project.service_names():
            service = project.services[name]

            if service.build is None:
                if service.image:
                    logger.info(f'Service "{name}" only references image {service.image}, no target')
                else:
                    missing.append(name)
                continue

            targets.append(self.build_target(name, service))

        return targets, missing

    def build_target(self, name: str, service: ServiceSpec) -> Target:
        """Assemble the target for one service that has a build section."""
        build = service.build
        interpolate = self.resolver.interpolate

        fields: Dict[str, Any] = {
            'context': self._optional(build.context),
            'dockerfile': self._optional(build.dockerfile),
            'target': self._optional(build.target),
            'network_mode': build.network,
            'pull': build.pull,
            'no_cache': build.no_cache,
        }

        args = {key: coerce_scalar(value) for key, value in build.args.items()}
        environment = {key: coerce_scalar(value) for key, value in service.environment.items()}
        fields['args'] = self.resolver.resolve_args(args, environment, service.env_file)
        fields['labels'] = {key: coerce_scalar(value) or '' for key, value in build.labels.items()}

        tags = [interpolate(tag) for tag in build.tags]
        if not tags and service.image:
            tags = [interpolate(service.image)]
        fields['tags'] = tags

        fields['platforms'] = list(build.platforms)
        fields['cache_from'] = list(build.cache_from)
        fields['cache_to'] = list(build.cache_to)
        fields['secrets'] = self.directives.build_secrets(name, build.secrets)
        fields['ssh'] = self.directives.build_ssh(build.ssh)
        fields['outputs'] = []

        self.merger.merge(name, fields, build.extension(self.merger.extension_key))

        logger.debug(f'Built target "{name}" (context={fields["context"]}, tags={fields["tags"]})')

        return Target(
            name=name,
            **{key: tuple(value) if isinstance(value, list) else value
               for key, value in fields.items()},
        )

    def _optional(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return self.resolver.interpolate(value)
