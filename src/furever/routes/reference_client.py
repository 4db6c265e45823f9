"""Catch-all route serving the bundled reference client.

Security: resolves symlinks and verifies the final path is within the
client directory to prevent path traversal.
"""

import mimetypes
from pathlib import Path

import anyio

from furever.http.request import Request
from furever.http.response import Response
from furever.routing.matcher import MatchResult
from furever.routing.route import Route

NOT_BUILT = "The reference client hasn't been built yet. Please check your console output."


class GetReferenceClient(Route):
    """Serves files under ``/client/``.

    The directory is looked up on every request, so a client built after
    the server started is picked up without a restart.
    """

    pattern = "/client/{*path}"
    method = "GET"

    def __init__(
        self,
        directory: str | Path | None,
        *,
        index: str = "index.html",
        not_found_page: str = "404.html",
    ) -> None:
        self._directory = Path(directory).resolve() if directory is not None else None
        self._index = index
        self._not_found_page = not_found_page

    @property
    def enabled(self) -> bool:
        return self._directory is not None and self._directory.is_dir()

    async def handle(self, request: Request, match: MatchResult) -> Response:
        if not self.enabled:
            return Response(body=NOT_BUILT, status=500)
        assert self._directory is not None

        segments = match.params["path"]
        if not isinstance(segments, list):
            msg = "Expected the rest parameter to be a list of segments"
            raise TypeError(msg)

        if not segments:
            if not match.path.endswith("/"):
                return Response(status=301).with_header("Location", f"{match.path}/")
            return await self._serve(self._directory / self._index)

        file_path = self._directory.joinpath(*segments).resolve()
        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403)

        if file_path.is_file():
            return await self._serve(file_path)
        return await self._not_found()

    async def _serve(self, file_path: Path, *, status: int = 200) -> Response:
        if not file_path.is_file():
            return await self._not_found()
        content_type, _ = mimetypes.guess_type(str(file_path))
        body = await anyio.Path(file_path).read_bytes()
        return Response(
            body=body,
            status=status,
            content_type=content_type or "application/octet-stream",
        )

    async def _not_found(self) -> Response:
        assert self._directory is not None
        page = self._directory / self._not_found_page
        if page.is_file():
            body = await anyio.Path(page).read_bytes()
            return Response(body=body, status=404, content_type="text/html; charset=utf-8")
        return Response(body="Not Found", status=404)
