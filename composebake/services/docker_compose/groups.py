"""Group construction for translated targets."""
from typing import List, Sequence

from composebake.models.bake import Group, Target


class GroupBuilder:
    """Collects every target into the implicit default group."""

    def __init__(self, default_group: str = "default"):
        self.default_group = default_group

    def build(self, targets: Sequence[Target]) -> List[Group]:
        """Return the default group, listing targets in build order."""
        return [Group(name=self.default_group, targets=tuple(t.name for t in targets))]
