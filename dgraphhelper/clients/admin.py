# Copyright The Volcano Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import time
from typing import Any, Callable, Dict, Optional, Union

import requests

import dgraphhelper.constants as constants
from dgraphhelper.exceptions import AdminRequestError, DropError, SchemaLoadError
from dgraphhelper.models import AdminResponse, InstanceHandle
from dgraphhelper.utils.http import create_session
from dgraphhelper.utils.log import get_logger, set_verbose
from dgraphhelper.utils.retry import RetryPolicy


class AdminClient:
    """Client for a Dgraph instance's admin endpoints.
    Installs schemas and wipes data between tests.
    """

    def __init__(
        self,
        target: Union[InstanceHandle, str],
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        settle_delay: float = constants.SCHEMA_SETTLE,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        verbose: bool = False,
    ):
        """Initialize the admin client.

        Args:
            target: Instance handle, or the instance's base URL.
            policy: Retry schedule for schema loads that hit "not ready" (default: 30 x 1s).
            sleep: Used for retry pauses and the post-load settle delay.
            settle_delay: Seconds to wait after a successful schema load.
            timeout: Per-request timeout in seconds; None means no timeout.
            session: HTTP session to use (default: a fresh non-retrying one).
            verbose: Enable debug logging.
        """
        if isinstance(target, InstanceHandle):
            self.base_url = target.base_url
        else:
            self.base_url = target.rstrip("/")
        self.policy = policy or RetryPolicy()
        self.sleep = sleep
        self.settle_delay = settle_delay
        self.timeout = timeout
        self.session = session or create_session()
        self.logger = set_verbose(get_logger(f"{__name__}.AdminClient"), verbose)

    def _post(self, path: str, **kwargs) -> AdminResponse:
        url = f"{self.base_url}{path}"
        self.logger.debug(f"POST {url}")
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"POST {url} failed: {e}")
            raise AdminRequestError(f"POST {url} failed: {e}") from e

        if response.status_code != 200:
            self.logger.error(f"POST {url} returned {response.status_code}: {response.text}")
            raise AdminRequestError(
                f"POST {url} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise AdminRequestError(
                f"POST {url} returned a non-JSON body: {response.text!r}",
                status_code=response.status_code,
            ) from e
        return AdminResponse.from_payload(payload)

    def load_schema(self, schema: str) -> bool:
        """Install a GraphQL schema, retrying while Dgraph reports "not ready".

        Args:
            schema: Schema text, sent as text/plain.

        Returns:
            True once the schema is installed, False if every attempt saw a
            transient reply.

        Raises:
            SchemaLoadError: On any other error reply, after a single attempt.
            AdminRequestError: On transport errors or a non-200 status.
        """
        self.logger.info("Loading schema")
        body = schema.encode("utf-8")
        pauses = self.policy.delays()

        for attempt in range(1, self.policy.max_attempts + 1):
            result = self._post(
                constants.SCHEMA_PATH,
                data=body,
                headers={"Content-Type": "text/plain"},
            )

            if result.succeeded:
                self.logger.info(f"Schema loaded after {attempt} attempt(s)")
                self.sleep(self.settle_delay)
                return True

            if result.errors and not result.not_ready:
                self.logger.error(f"Schema load failed: {result.errors[0]}")
                raise SchemaLoadError(result.errors)

            if result.errors:
                self.logger.debug(f"Attempt {attempt}: {result.errors[0]}")
            else:
                self.logger.warning(f"Unexpected schema response: {result.to_dict()}")

            pause = next(pauses, None)
            if pause is None:
                break
            self.sleep(pause)

        self.logger.warning(f"Schema not loaded after {self.policy.max_attempts} attempts")
        return False

    def _alter(self, payload: Dict[str, Any], operation: str):
        result = self._post(constants.ALTER_PATH, json=payload)
        if not result.succeeded:
            self.logger.error(f"{operation} failed: {result.to_dict()}")
            raise DropError(f"{operation} failed: code={result.code!r} errors={result.errors}")
        self.logger.info(f"{operation} succeeded")

    def drop_data(self):
        """Delete all data; the schema is left intact."""
        self._alter(constants.DROP_DATA_PAYLOAD, "Drop data")

    def drop_all(self):
        """Delete all data and the schema."""
        self._alter(constants.DROP_ALL_PAYLOAD, "Drop all")

    def close(self):
        """Close the underlying session and release connection pool resources."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
