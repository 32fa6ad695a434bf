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

from .clients import AdminClient, InstanceLauncher, ReadinessPoller
from .config import FixtureSettings, RuntimeConfig
from .constants import DEFAULT_IMAGE
from .exceptions import (
    AdminError,
    AdminRequestError,
    AllocationError,
    ContainerError,
    DgraphHelperError,
    DropError,
    InstanceNotReadyError,
    InstanceNotStartedError,
    RuntimeConnectionError,
    SchemaLoadError,
)
from .instance import DgraphInstance
from .models import AdminResponse, InstanceHandle, Readiness
from .utils import RetryPolicy, allocate_free_port

__all__ = [
    "AdminClient",
    "AdminError",
    "AdminRequestError",
    "AdminResponse",
    "AllocationError",
    "ContainerError",
    "DEFAULT_IMAGE",
    "DgraphHelperError",
    "DgraphInstance",
    "DropError",
    "FixtureSettings",
    "InstanceHandle",
    "InstanceLauncher",
    "InstanceNotReadyError",
    "InstanceNotStartedError",
    "ReadinessPoller",
    "Readiness",
    "RetryPolicy",
    "RuntimeConfig",
    "RuntimeConnectionError",
    "SchemaLoadError",
    "allocate_free_port",
]
