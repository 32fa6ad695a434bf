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

import unittest

from dgraphhelper.utils.retry import RetryPolicy


class TestRetryPolicy(unittest.TestCase):
    """Test the bounded retry schedule."""

    def test_defaults_are_thirty_one_second_attempts(self):
        """Default policy: 30 attempts with 29 one-second pauses between them."""
        policy = RetryPolicy()
        self.assertEqual(policy.max_attempts, 30)
        delays = list(policy.delays())
        self.assertEqual(len(delays), 29)
        self.assertTrue(all(d == 1.0 for d in delays))

    def test_backoff_is_capped(self):
        """Backoff should grow the pause until max_delay."""
        policy = RetryPolicy(max_attempts=5, delay=1.0, backoff=2.0, max_delay=5.0)
        self.assertEqual(list(policy.delays()), [1.0, 2.0, 4.0, 5.0])

    def test_single_attempt_has_no_pauses(self):
        """One attempt means nothing to wait between."""
        self.assertEqual(list(RetryPolicy(max_attempts=1).delays()), [])

    def test_invalid_values_rejected(self):
        """Out-of-range settings should raise ValueError."""
        with self.assertRaises(ValueError):
            RetryPolicy(max_attempts=0)
        with self.assertRaises(ValueError):
            RetryPolicy(delay=-1)
        with self.assertRaises(ValueError):
            RetryPolicy(backoff=0.5)
        with self.assertRaises(ValueError):
            RetryPolicy(max_delay=-0.1)


if __name__ == "__main__":
    unittest.main()
