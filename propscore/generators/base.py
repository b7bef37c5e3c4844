"""Base generator class for synthetic data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides a seeded Faker instance and a private ``random.Random`` so
    two generators built with the same seed yield the same sequence
    regardless of what else draws from the global RNG.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_AU``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_AU") -> None:
        self.seed = seed
        self.fake = Faker(locale)
        self.rng = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)
