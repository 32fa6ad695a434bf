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

import socket

from dgraphhelper.constants import LOCAL_HOST
from dgraphhelper.exceptions import AllocationError


def allocate_free_port(host: str = LOCAL_HOST) -> int:
    """Find a TCP port on ``host`` that is free right now.

    The probe socket is closed before returning, so another process may take
    the port before the container binds it.

    Raises:
        AllocationError: If no socket could be bound.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind((host, 0))
            return sock.getsockname()[1]
    except OSError as e:
        raise AllocationError(f"Failed to allocate a free port on {host}: {e}") from e
