"""``/animals`` resource routes backed by an ``AnimalRegistry``."""

from furever.animals import Animal, AnimalRegistry, Species
from furever.http.request import Request
from furever.http.response import Response, json_response
from furever.routes._body import invalid_body, read_body
from furever.routing.matcher import MatchResult
from furever.routing.route import Route
from furever.validation import Validator, integer, one_of, required, string

ANIMAL: dict[str, list[Validator]] = {
    "species": [required, integer, one_of(*(int(s) for s in Species))],
    "description": [required, string],
}


def _not_found() -> Response:
    return json_response({"message": "Not Found"}, status=404)


def _animal_id(match: MatchResult) -> str:
    value = match.params["id"]
    assert isinstance(value, str)
    return value


class _AnimalRoute(Route):
    def __init__(self, animals: AnimalRegistry) -> None:
        self._animals = animals


class ListAnimals(_AnimalRoute):
    pattern = "/animals"
    method = "GET"

    def handle(self, request: Request, match: MatchResult) -> Response:
        return json_response(self._animals.list_ids())


class GetAnimal(_AnimalRoute):
    pattern = "/animals/:id"
    method = "GET"

    def handle(self, request: Request, match: MatchResult) -> Response:
        animal = self._animals.get(_animal_id(match))
        if animal is None:
            return _not_found()
        return json_response(animal.to_dict())


class PostAnimal(_AnimalRoute):
    pattern = "/animals"
    method = "POST"

    async def handle(self, request: Request, match: MatchResult) -> Response:
        result = await read_body(request, ANIMAL)
        if not result:
            return invalid_body(result)
        animal_id = self._animals.create(
            Animal(Species(result.data["species"]), result.data["description"])
        )
        return json_response({"id": animal_id}, status=201)


class PutAnimal(_AnimalRoute):
    pattern = "/animals/:id"
    method = "PUT"

    async def handle(self, request: Request, match: MatchResult) -> Response:
        animal_id = _animal_id(match)
        if not self._animals.has(animal_id):
            return _not_found()
        result = await read_body(request, ANIMAL)
        if not result:
            return invalid_body(result)
        try:
            self._animals.update(
                animal_id, Animal(Species(result.data["species"]), result.data["description"])
            )
        except KeyError:
            # Deleted while the body was being read
            return _not_found()
        return Response(status=204)


class DeleteAnimal(_AnimalRoute):
    pattern = "/animals/:id"
    method = "DELETE"

    def handle(self, request: Request, match: MatchResult) -> Response:
        if not self._animals.delete(_animal_id(match)):
            return _not_found()
        return Response(status=204)
