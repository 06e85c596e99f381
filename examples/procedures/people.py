"""Example declaration group: people listings with injected logging."""

from dataclasses import dataclass
from typing import Iterator

from proccore import Log, procedure, resource


@dataclass
class Person:
    """One output row: a person's name."""

    name: str


@dataclass
class BananaOwner:
    """One output row: a person and how many bananas they own."""

    name: str
    bananas: int


class PeopleProcedures:
    """Procedures exposed under this module's namespace."""

    log: Log = resource()

    @procedure
    def list_cool_people(self) -> Iterator[Person]:
        """List the coolest people we know."""
        self.log.info("listing cool people")
        yield Person("Bonnie")
        yield Person("Clyde")

    @procedure(description="People who own at least `minimum` bananas")
    def list_banana_owners(self, minimum: int) -> Iterator[BananaOwner]:
        for owner in (BananaOwner("Jake", 18), BananaOwner("Pontus", 2)):
            if owner.bananas >= minimum:
                yield owner
