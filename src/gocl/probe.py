# probe.py
from __future__ import annotations

import http.client
import socket
import urllib.error
import urllib.request

from . import __version__
from .errors import ProbeError

OK_STATUSES = (200, 204)


class HttpProber:
    """Reachability capability: GET the URL and report the HTTP status."""

    def __init__(self, user_agent: str | None = None):
        self.user_agent = user_agent or f"gocl/{__version__}"

    def probe(self, url: str, timeout: float) -> int:
        """
        Issue a GET request and return the final status code.

        HTTP error statuses (404, 500, ...) are returned, not raised; only a
        failure to get any response at all raises.

        Raises:
            ProbeError: DNS failure, refused connection, TLS error, timeout.
        """
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent}, method="GET")
            with urllib.request.urlopen(req, timeout=timeout) as response:
                return response.status
        except urllib.error.HTTPError as e:
            e.close()
            return e.code
        except urllib.error.URLError as e:
            raise ProbeError(str(e.reason)) from e
        except (socket.timeout, TimeoutError) as e:
            raise ProbeError(f"timed out after {timeout}s") from e
        except (OSError, http.client.HTTPException) as e:
            raise ProbeError(str(e) or type(e).__name__) from e
        except ValueError as e:
            # urllib rejects URLs without a known scheme before any I/O
            raise ProbeError(str(e)) from e


def is_reachable(status: int) -> bool:
    return status in OK_STATUSES
