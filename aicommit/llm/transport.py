"""JSON-over-HTTPS helper shared by the urllib based clients."""

import http.client
import json
import socket
import urllib.error
import urllib.request

from aicommit.llm.base import RemoteAPIError, RemoteTransportError, error_from_response


def post_json(label: str, url: str, payload: dict, headers: dict, timeout: float) -> dict:
    """POST `payload` as JSON and return the decoded response body.

    Raises RemoteAPIError (or AuthError) for non-2xx answers and
    RemoteTransportError when no answer arrives.
    """
    data = json.dumps(payload).encode('utf-8')
    req = urllib.request.Request(
        url,
        data=data,
        headers={"Content-Type": "application/json", **headers},
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            body = response.read().decode('utf-8')
    except urllib.error.HTTPError as e:
        raise error_from_response(label, e.code, e.read().decode('utf-8', errors='replace'))
    except urllib.error.URLError as e:
        if isinstance(e.reason, (socket.timeout, TimeoutError)):
            raise RemoteTransportError(f"{label} request timed out after {timeout}s")
        raise RemoteTransportError(f"{label} request failed: {e.reason}")
    except (socket.timeout, TimeoutError):
        raise RemoteTransportError(f"{label} request timed out after {timeout}s")
    except http.client.HTTPException as e:
        raise RemoteTransportError(f"Incomplete response from {label}: {e}")
    except OSError as e:
        raise RemoteTransportError(f"Connection to {label} lost: {e}")

    try:
        return json.loads(body)
    except json.JSONDecodeError:
        raise RemoteAPIError(f"{label} API error: failed to parse response")
