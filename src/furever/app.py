"""Furever application class: the composition root.

Owns every process-wide collaborator (database, user store, session
store, password hasher, animal registry) and the router that hands them
to routes. Mutable during setup, frozen when the first ASGI scope
arrives.
"""

import logging
import random
import threading
from collections.abc import Callable

from furever._internal.asgi import Receive, Scope, Send
from furever.animals import AnimalRegistry
from furever.config import AppConfig
from furever.data import Database
from furever.routes import (
    DeleteAnimal,
    DeleteSignOut,
    GetAnimal,
    GetHome,
    GetReferenceClient,
    ListAnimals,
    PostAnimal,
    PostSignIn,
    PostSignUp,
    PutAnimal,
)
from furever.routing.route import Route
from furever.routing.router import Router
from furever.security.passwords import PasswordHasher
from furever.server.handler import handle_request
from furever.sessions import Clock, SessionStore, utc_now
from furever.users import UserStore

logger = logging.getLogger("furever.server")


class App:
    """The furever ASGI application.

    Usage::

        app = App(AppConfig(database_url="sqlite:///data.sqlite"))
        # serve with any ASGI server, e.g. ``furever run``

    Collaborators can be injected for tests::

        app = App(config, hasher=FastHasher(), clock=frozen_clock)

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the router, even if a threaded server calls
        ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "animals",
        "config",
        "db",
        "hasher",
        "router",
        "sessions",
        "users",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        db: Database | None = None,
        hasher: PasswordHasher | None = None,
        clock: Clock = utc_now,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.db: Database = db or Database(self.config.database_url, echo=self.config.database_echo)
        self.users = UserStore(self.db)
        self.sessions = SessionStore(clock)
        self.hasher = hasher or PasswordHasher()
        self.animals = AnimalRegistry()
        self.router = Router()
        self._frozen = False
        self._freeze_lock = threading.Lock()

        for route in self._default_routes(rng):
            self.router.register(route)

    def _default_routes(self, rng: Callable[[], float]) -> list[Route]:
        return [
            GetHome(),
            PostSignUp(self.users, self.hasher),
            PostSignIn(self.users, self.hasher, self.sessions, ttl=self.config.session_ttl),
            DeleteSignOut(
                self.sessions,
                failure_rate=self.config.sign_out_failure_rate,
                rng=rng,
            ),
            ListAnimals(self.animals),
            GetAnimal(self.animals),
            PostAnimal(self.animals),
            PutAnimal(self.animals),
            DeleteAnimal(self.animals),
            GetReferenceClient(self.config.client_dir),
        ]

    # -- Route registration --

    def add_route(self, route: Route) -> None:
        """Register an extra route. Only allowed before the app serves."""
        self._check_not_frozen()
        self.router.register(route)

    # -- Lifecycle --

    async def startup(self) -> None:
        """Open the database and create the schema."""
        self._ensure_frozen()
        await self.db.connect()
        await self.users.create_schema()
        logger.debug("Startup complete (%d routes)", len(self.router.routes))

    async def shutdown(self) -> None:
        await self.db.disconnect()

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        self._ensure_frozen()
        await handle_request(scope, receive, send, router=self.router)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self.router.compile()
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving requests."
            raise RuntimeError(msg)
