from typing import NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from HTTP fetch operation.

    `url` is the final URL after redirects; relative links are resolved
    against it.
    """
    url: str
    status_code: int
    text: str
    content_type: Optional[str] = None
