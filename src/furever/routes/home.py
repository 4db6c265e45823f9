from furever.http.request import Request
from furever.http.response import Response, json_response
from furever.routing.matcher import MatchResult
from furever.routing.route import Route


class GetHome(Route):
    pattern = "/"
    method = "GET"

    def handle(self, request: Request, match: MatchResult) -> Response:
        return json_response({"message": "Hello, World!"})
