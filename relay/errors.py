from typing import Any, Optional

import requests


class UpstreamError(Exception):
    """
    A call to the store or the DJI API failed.
    `detail` carries the downstream response body when there was one,
    otherwise the exception message.
    """
    def __init__(self, detail: Any, status_code: Optional[int] = None):
        super().__init__(detail if isinstance(detail, str) else repr(detail))
        self.detail = detail
        self.status_code = status_code


def upstream_error(exc: requests.RequestException) -> UpstreamError:
    """Wrap a requests failure, preferring the response body over the message."""
    resp = getattr(exc, "response", None)
    if resp is not None and resp.content:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        return UpstreamError(detail, status_code=resp.status_code)
    return UpstreamError(str(exc), status_code=resp.status_code if resp is not None else None)
