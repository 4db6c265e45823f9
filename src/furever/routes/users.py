"""Account routes: sign-up, sign-in, sign-out.

Failure responses are deliberately uniform: a caller can't tell from the
response whether an email is registered.
"""

import logging
import random
from collections.abc import Callable
from datetime import timedelta

from furever.data import IntegrityError
from furever.http.request import Request
from furever.http.response import Response, json_response
from furever.routes._body import invalid_body, read_body
from furever.routing.matcher import MatchResult
from furever.routing.route import Route
from furever.security.passwords import PasswordHasher
from furever.sessions import DEFAULT_TTL, Session, SessionStore
from furever.users import UserStore
from furever.validation import (
    Validator,
    email,
    max_length,
    min_length,
    required,
    string,
    utf8,
)

logger = logging.getLogger("furever.auth")

CREDENTIALS: dict[str, list[Validator]] = {
    "email": [required, string, utf8, email],
    "password": [required, string, utf8, min_length(8), max_length(72)],
}

# One response object for "no such user" and "wrong password".
INVALID_CREDENTIALS = json_response(
    {"message": "Invalid email or password", "code": "invalid_credentials"},
    status=401,
)

USER_NOT_CREATED = json_response({"message": "Could not create user"}, status=400)


class PostSignUp(Route):
    pattern = "/users/sign-up"
    method = "POST"

    def __init__(self, users: UserStore, hasher: PasswordHasher) -> None:
        self._users = users
        self._hasher = hasher

    async def handle(self, request: Request, match: MatchResult) -> Response:
        result = await read_body(request, CREDENTIALS)
        if not result:
            return invalid_body(result)

        password_hash = await self._hasher.hash(result.data["password"])
        try:
            user_id = await self._users.create(result.data["email"], password_hash)
        except IntegrityError:
            logger.info("Sign-up rejected by a uniqueness constraint")
            return USER_NOT_CREATED

        logger.info("User %d created", user_id)
        return json_response({"message": "User created"}, status=201)


class PostSignIn(Route):
    pattern = "/users/sign-in"
    method = "POST"

    def __init__(
        self,
        users: UserStore,
        hasher: PasswordHasher,
        sessions: SessionStore,
        *,
        ttl: timedelta = DEFAULT_TTL,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._sessions = sessions
        self._ttl = ttl

    async def handle(self, request: Request, match: MatchResult) -> Response:
        result = await read_body(request, CREDENTIALS)
        if not result:
            return invalid_body(result)

        user = await self._users.find_by_email(result.data["email"])
        if user is None:
            return INVALID_CREDENTIALS

        if not await self._hasher.verify(result.data["password"], user.password_hash):
            logger.info("Failed sign-in for user %d", user.id)
            return INVALID_CREDENTIALS

        session = Session.create(user.id, now=self._sessions.clock(), ttl=self._ttl)
        self._sessions.add(session)
        self._sessions.remove_expired()

        logger.info("User %d signed in", user.id)
        return json_response({"token": session.token_string})


class DeleteSignOut(Route):
    """Ends the session named by ``Authorization: Bearer <token>``.

    ``failure_rate`` reproduces the legacy random 402 answer; it is 0.0
    unless ``AppConfig.sign_out_failure_rate`` says otherwise.
    """

    pattern = "/users/sign-out"
    method = "DELETE"

    def __init__(
        self,
        sessions: SessionStore,
        *,
        failure_rate: float = 0.0,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._sessions = sessions
        self._failure_rate = failure_rate
        self._rng = rng

    def handle(self, request: Request, match: MatchResult) -> Response:
        header = request.headers.get("authorization")
        if header is None:
            return _bad_request("Missing Authorization header")

        scheme, _, token = header.strip().partition(" ")
        if not scheme:
            return _bad_request("Missing authorization scheme")
        if scheme.lower() != "bearer":
            return _bad_request(f"Unsupported authorization scheme {scheme!r}, expected Bearer")
        token = token.strip()
        if not token:
            return _bad_request("Missing bearer token")

        if not self._sessions.has(token):
            return json_response({"message": "Session does not exist"}, status=404)

        if self._failure_rate and self._rng() < self._failure_rate:
            logger.warning("Injected sign-out failure")
            return json_response({"message": "Payment Required"}, status=402)

        self._sessions.remove(token)
        logger.info("Session ended")
        return json_response({"message": "Signed out"})


def _bad_request(message: str) -> Response:
    return json_response({"message": message}, status=400)
