"""Route implementations served by the furever app."""

from furever.routes.animals import DeleteAnimal, GetAnimal, ListAnimals, PostAnimal, PutAnimal
from furever.routes.home import GetHome
from furever.routes.reference_client import GetReferenceClient
from furever.routes.users import DeleteSignOut, PostSignIn, PostSignUp

__all__ = [
    "DeleteAnimal",
    "DeleteSignOut",
    "GetAnimal",
    "GetHome",
    "GetReferenceClient",
    "ListAnimals",
    "PostAnimal",
    "PostSignIn",
    "PostSignUp",
    "PutAnimal",
]
