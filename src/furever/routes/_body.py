"""Shared request-body handling for JSON routes."""

from furever.http.request import Request
from furever.http.response import Response, json_response
from furever.validation import ValidationResult, Validator, malformed, validate


async def read_body(request: Request, rules: dict[str, list[Validator]]) -> ValidationResult:
    """Decode the request body as JSON and validate it against *rules*."""
    try:
        data = await request.json()
    except ValueError:
        return malformed("Malformed JSON")
    return validate(data, rules)


def invalid_body(result: ValidationResult) -> Response:
    """400 response listing every validation issue."""
    return json_response(
        {"message": "Invalid request body", "issues": result.issues},
        status=400,
    )
