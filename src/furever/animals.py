"""In-memory animal registry for the adoption listings."""

import threading
import uuid
from dataclasses import dataclass
from enum import IntEnum


class Species(IntEnum):
    DOG = 0
    CAT = 1


@dataclass(frozen=True, slots=True)
class Animal:
    species: Species
    description: str

    def to_dict(self) -> dict[str, int | str]:
        return {"species": int(self.species), "description": self.description}


class AnimalRegistry:
    """Animals keyed by random UUID strings. Lives as long as the process."""

    __slots__ = ("_animals", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._animals: dict[str, Animal] = {}

    def create(self, animal: Animal) -> str:
        animal_id = str(uuid.uuid4())
        with self._lock:
            self._animals[animal_id] = animal
        return animal_id

    def has(self, animal_id: str) -> bool:
        with self._lock:
            return animal_id in self._animals

    def update(self, animal_id: str, animal: Animal) -> None:
        """Replace an existing animal. Raises ``KeyError`` for unknown ids."""
        with self._lock:
            if animal_id not in self._animals:
                raise KeyError(animal_id)
            self._animals[animal_id] = animal

    def list_ids(self) -> list[str]:
        with self._lock:
            return list(self._animals)

    def get(self, animal_id: str) -> Animal | None:
        with self._lock:
            return self._animals.get(animal_id)

    def delete(self, animal_id: str) -> bool:
        """Remove an animal. Returns ``False`` if it didn't exist."""
        with self._lock:
            return self._animals.pop(animal_id, None) is not None
