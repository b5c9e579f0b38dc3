# quote/client.py
# Single outbound call to the Concept Logistics LTL rate API.
# - One POST per quote, no retries
# - The whole call (connect, headers and body) must finish within the
#   configured timeout; requests' own timeout only bounds each socket read
# - Transport failures, HTTP errors and non-JSON bodies become quote errors
# - Credentials travel in the request only; nothing secret is logged

from __future__ import annotations

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout

import requests

from quote.errors import NetworkError, UpstreamHttpError, UpstreamMalformedResponse
from quote.utils import app_logger

AUTH_TOKEN_HEADER = "AuthToken"
_LOG_BODY_LIMIT = 500
_CHUNK_SIZE = 1024


def _log():
    return app_logger(__name__)


class _Cancelled(Exception):
    pass


class CarrierRateClient:
    """Posts rate requests using a :class:`config.CarrierSettings`."""

    def __init__(self, settings):
        self.settings = settings

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            AUTH_TOKEN_HEADER: self.settings.auth_token,
        }

    def _post(self, endpoint: str, payload: dict, cancelled: threading.Event) -> tuple[int, bytes]:
        """Send the request and read the whole body, stopping once cancelled."""
        r = requests.post(
            endpoint,
            json=payload,
            headers=self._headers(),
            timeout=self.settings.timeout,
            stream=True,
        )
        try:
            chunks = []
            for chunk in r.iter_content(chunk_size=_CHUNK_SIZE):
                if cancelled.is_set():
                    raise _Cancelled()
                chunks.append(chunk)
            return r.status_code, b"".join(chunks)
        finally:
            r.close()

    def _timed_out(self) -> NetworkError:
        _log().warning("[carrier] timed out after %ss", self.settings.timeout)
        return NetworkError(
            f"Carrier rate request timed out after {self.settings.timeout:g} seconds"
        )

    def fetch_rates(self, payload: dict):
        """POST ``payload`` and return the parsed JSON body.

        Raises:
          NetworkError: connection failure, or no full answer within the timeout
          UpstreamHttpError: non-2xx status from the carrier
          UpstreamMalformedResponse: body is not JSON
        """
        endpoint = self.settings.endpoint
        _log().info("[carrier] POST %s", endpoint)

        cancelled = threading.Event()
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="carrier-rate")
        try:
            future = pool.submit(self._post, endpoint, payload, cancelled)
            status_code, body = future.result(timeout=self.settings.timeout)
        except (FutureTimeout, requests.Timeout):
            cancelled.set()
            raise self._timed_out()
        except requests.RequestException as e:
            _log().warning("[carrier] request failed: %s", type(e).__name__)
            raise NetworkError(f"Network request failed: {type(e).__name__}")
        finally:
            pool.shutdown(wait=False)

        _log().info("[carrier] status=%s", status_code)
        if not 200 <= status_code < 300:
            text = body.decode("utf-8", errors="replace")
            _log().warning("[carrier] HTTP %s from rate API", status_code)
            _log().debug("[carrier] error body: %s", text[:_LOG_BODY_LIMIT])
            raise UpstreamHttpError(status_code, text)

        try:
            return json.loads(body)
        except ValueError:
            _log().warning("[carrier] response was not JSON")
            _log().debug(
                "[carrier] raw body: %s",
                body.decode("utf-8", errors="replace")[:_LOG_BODY_LIMIT],
            )
            raise UpstreamMalformedResponse("Carrier rate API did not return JSON")
