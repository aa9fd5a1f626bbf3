import json
from typing import Any


class GraphError(Exception):
    pass


class GraphAuthError(GraphError):
    def __init__(self, error: str, description: str | None = None) -> None:
        self.error = error
        self.description = description
        super().__init__(f"Token acquisition failed: {error} - {description}")


class GraphApiError(GraphError):
    """Non-2xx response from the directory service.

    ``body`` is the deserialized error payload, or the raw text when the
    service did not answer with JSON.
    """

    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        self.body = body
        super().__init__(
            "Error Calling the Graph API: \n" + json.dumps(body, indent=2)
        )
