"""Base generator class for all data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Every random draw goes through ``self.rng``, the seeded Faker
    instance's own ``random.Random``. The module-level ``random`` state is
    never touched, so generators sharing one Faker produce a single
    reproducible stream.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility. Ignored when ``fake`` is given;
        seed the shared instance instead.
    locale : str
        Faker locale (default ``en_US``).
    fake : Faker | None
        Shared Faker instance, typically owned by a scenario.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        fake: Faker | None = None,
    ) -> None:
        if fake is None:
            fake = Faker(locale)
            if seed is not None:
                fake.seed_instance(seed)
        self.fake = fake

    @property
    def rng(self) -> random.Random:
        """Random source backing all draws of this generator."""
        return self.fake.random
