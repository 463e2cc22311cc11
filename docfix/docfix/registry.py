"""
Fixture registry.

Fixture modules register their fixtures explicitly:

    registry = Registry.for_module(__file__)

    users = registry.register(Fixture(
        name="users",
        collections={"user_name": [UserColl, SettingsColl]},
        keys=["alan", "neil"],
    ))

    if __name__ == "__main__":
        sys.exit(registry.main())

Fixtures without their own path are stored next to the defining module.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Union

from .errors import DuplicateFixtureError
from .fixture import Fixture
from .orchestrator import gather_total

logger = logging.getLogger(__name__)


class Registry:
    """
    An ordered set of uniquely named fixtures.

    Attributes:
        default_path: Directory given to fixtures registered without a path
    """

    def __init__(self, default_path: Optional[Union[str, Path]] = None):
        self.default_path = Path(default_path) if default_path else None
        self._fixtures: Dict[str, Fixture] = {}

    @classmethod
    def for_module(cls, module_file: Union[str, Path]) -> "Registry":
        """Create a registry defaulting to the directory of ``module_file``."""
        return cls(default_path=Path(module_file).resolve().parent)

    def __len__(self) -> int:
        return len(self._fixtures)

    def __iter__(self) -> Iterator[Fixture]:
        return iter(self._fixtures.values())

    def __contains__(self, name: object) -> bool:
        return name in self._fixtures

    @property
    def fixtures(self) -> List[Fixture]:
        return list(self._fixtures.values())

    def get(self, name: str) -> Fixture:
        """Return the fixture called ``name``; raises KeyError if absent."""
        return self._fixtures[name]

    def register(self, fixture: Fixture) -> Fixture:
        """
        Add a fixture.

        Args:
            fixture: Fixture to register

        Returns:
            The registered fixture; a copy carrying the default path when
            the fixture had no path of its own

        Raises:
            DuplicateFixtureError: If a fixture with that name is registered
        """
        if fixture.name in self._fixtures:
            raise DuplicateFixtureError(fixture.name)

        if fixture.path is None and self.default_path is not None:
            fixture = fixture.with_path(self.default_path)

        self._fixtures[fixture.name] = fixture
        logger.debug(f"{fixture.name}: directory: {fixture.path}")
        return fixture

    def apply_default_path(self, path: Union[str, Path]) -> None:
        """Give ``path`` to registered fixtures that still have none."""
        for name, fixture in self._fixtures.items():
            if fixture.path is None:
                self._fixtures[name] = fixture.with_path(path)

    async def load_all(self) -> int:
        """Load every fixture concurrently; returns documents saved."""
        return await gather_total(f.load() for f in self)

    async def get_all(self) -> int:
        """Get every fixture concurrently; returns documents written."""
        return await gather_total(f.get() for f in self)

    async def clear_all(self) -> int:
        """Clear every fixture concurrently; returns documents removed."""
        return await gather_total(f.clear() for f in self)

    def main(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run the fixture CLI against this registry; returns the exit status."""
        from .cli import main_for_registry
        return main_for_registry(self, argv)


__all__ = ["Registry"]
