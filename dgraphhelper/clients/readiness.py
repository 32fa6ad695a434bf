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
from typing import Callable, Optional

import requests

from dgraphhelper.models import Readiness
from dgraphhelper.utils.http import create_session
from dgraphhelper.utils.log import get_logger, set_verbose
from dgraphhelper.utils.retry import RetryPolicy


class ReadinessPoller:
    """Blocks until a Dgraph HTTP endpoint answers ``GET /`` with 200."""

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        verbose: bool = False,
    ):
        """Initialize the poller.

        Args:
            policy: Attempt ceiling and pause between attempts (default: 30 x 1s).
            sleep: Called with each pause; tests pass a fake.
            session: HTTP session to poll with (default: a fresh non-retrying one).
            timeout: Per-request timeout in seconds; None blocks like a plain GET.
            verbose: Enable debug logging.
        """
        self.policy = policy or RetryPolicy()
        self.sleep = sleep
        self.session = session or create_session()
        self.timeout = timeout
        self.logger = set_verbose(get_logger(f"{__name__}.ReadinessPoller"), verbose)

    def probe(self, base_url: str) -> bool:
        """Single readiness check. Any transport error counts as not ready."""
        url = base_url.rstrip("/") + "/"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.debug(f"GET {url} failed: {e}")
            return False
        self.logger.debug(f"GET {url} -> {response.status_code}")
        return response.status_code == 200

    def wait(self, base_url: str) -> Readiness:
        """Poll ``base_url`` until it is ready or the policy runs out.

        Returns:
            Readiness.READY on the first 200, Readiness.NOT_READY on exhaustion.
        """
        pauses = self.policy.delays()
        for attempt in range(1, self.policy.max_attempts + 1):
            if self.probe(base_url):
                self.logger.info(f"Dgraph at {base_url} is ready after {attempt} attempt(s)")
                return Readiness.READY
            pause = next(pauses, None)
            if pause is None:
                break
            self.sleep(pause)

        self.logger.warning(
            f"Dgraph at {base_url} not ready after {self.policy.max_attempts} attempts"
        )
        return Readiness.NOT_READY

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()
