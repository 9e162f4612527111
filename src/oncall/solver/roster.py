"""Roster filtering before variable creation."""
import random
from typing import List, Sequence

from oncall.models.person import Person
from oncall.solver.errors import UnsatisfiableRoster
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.solver.roster")

# One Primary and one Secondary per period
MIN_AVAILABLE = 2


def remove_out_of_office(persons: Sequence[Person]) -> List[Person]:
    """Drop people flagged as unavailable for the whole window, keeping order."""
    return [p for p in persons if not p.out_of_office]


def filter_available(persons: Sequence[Person], rng: random.Random) -> List[Person]:
    """
    Get the people who can take at least one shift, in shuffled order.

    The shuffle keeps the solver from always trying the same person first.
    `rng` is the only randomness used, so a seeded `random.Random` makes
    the order reproducible.

    Raises:
        UnsatisfiableRoster: fewer than two people remain.
    """
    available = remove_out_of_office(persons)
    dropped = len(persons) - len(available)
    if dropped:
        logger.info(f"Removed {dropped} out-of-office people from the rotation")

    if len(available) < MIN_AVAILABLE:
        raise UnsatisfiableRoster(len(available), MIN_AVAILABLE)

    rng.shuffle(available)
    logger.debug(f"Rotation order: {[p.name for p in available]}")
    return available
