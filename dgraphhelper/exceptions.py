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

class DgraphHelperError(Exception):
    """Base exception for all dgraph helper operations"""
    pass

class AllocationError(DgraphHelperError):
    """Raised when no local port can be bound"""
    pass

class RuntimeConnectionError(DgraphHelperError):
    """Raised when the Docker daemon cannot be reached"""
    pass

class ContainerError(DgraphHelperError):
    """Raised when the Docker daemon rejects a container operation"""
    def __init__(self, message, instance_id=None):
        self.instance_id = instance_id
        super().__init__(message)

class ContainerCreateError(ContainerError):
    pass

class ContainerStartError(ContainerError):
    pass

class ContainerStopError(ContainerError):
    pass

class ContainerRemoveError(ContainerError):
    pass

class InstanceNotReadyError(DgraphHelperError):
    """Raised when readiness is required but the instance never answered"""
    def __init__(self, handle):
        self.handle = handle
        super().__init__(f"Dgraph at {handle.base_url} did not become ready")

class InstanceNotStartedError(DgraphHelperError):
    """Raised when an admin operation is issued before start()"""
    pass

class AdminError(DgraphHelperError):
    """Base exception for admin endpoint failures"""
    pass

class AdminRequestError(AdminError):
    """Raised on transport errors, unexpected HTTP status or undecodable replies"""
    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)

class SchemaLoadError(AdminError):
    """Raised when the schema endpoint reports a non-transient error"""
    def __init__(self, messages):
        self.messages = list(messages)
        super().__init__(self.messages[0] if self.messages else "schema load failed")

class DropError(AdminError):
    """Raised when an alter operation does not report success"""
    pass
