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

from dataclasses import dataclass
from typing import Iterator, Optional

from dgraphhelper.constants import POLL_ATTEMPTS, POLL_INTERVAL


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry schedule: at most ``max_attempts`` tries, pausing between them.

    The pause after the n-th failed attempt is ``delay * backoff ** n``, capped
    at ``max_delay`` when one is set. With the default ``backoff`` of 1.0 the
    schedule is a fixed interval.
    """
    max_attempts: int = POLL_ATTEMPTS
    delay: float = POLL_INTERVAL
    backoff: float = 1.0
    max_delay: Optional[float] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")
        if self.backoff < 1.0:
            raise ValueError("backoff must be at least 1.0")
        if self.max_delay is not None and self.max_delay < 0:
            raise ValueError("max_delay must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Pause to take after the zero-based ``attempt`` fails."""
        pause = self.delay * (self.backoff ** attempt)
        if self.max_delay is not None:
            pause = min(pause, self.max_delay)
        return pause

    def delays(self) -> Iterator[float]:
        """Yield the pauses between attempts (one fewer than ``max_attempts``)."""
        for attempt in range(self.max_attempts - 1):
            yield self.delay_for(attempt)
