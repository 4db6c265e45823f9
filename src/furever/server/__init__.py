"""ASGI plumbing: request intake and response emission."""
