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

DEFAULT_IMAGE = "dgraph/standalone:v21.03.2"

SERVICE_PORT = 8080
BIND_HOST = "0.0.0.0"
LOCAL_HOST = "localhost"

POLL_ATTEMPTS = 30
POLL_INTERVAL = 1.0  # seconds
STARTUP_GRACE = 1.0  # seconds
SCHEMA_SETTLE = 0.5  # seconds

SCHEMA_PATH = "/admin/schema"
ALTER_PATH = "/alter"

SUCCESS_CODE = "Success"
NOT_READY_MARKER = "not ready"

DROP_DATA_PAYLOAD = {"drop_op": "DATA"}
DROP_ALL_PAYLOAD = {"drop_all": True}

DOCKER_HOST_ENV = "DOCKER_HOST"
DOCKER_TLS_VERIFY_ENV = "DOCKER_TLS_VERIFY"
DOCKER_CERT_PATH_ENV = "DOCKER_CERT_PATH"
DOCKER_API_VERSION_ENV = "DOCKER_API_VERSION"
DEFAULT_API_VERSION = "auto"
DEFAULT_DOCKER_TIMEOUT = 60  # seconds

DGRAPH_IMAGE_ENV = "DGRAPH_IMAGE"
DGRAPH_REQUIRE_READY_ENV = "DGRAPH_REQUIRE_READY"
DGRAPH_VERBOSE_ENV = "DGRAPH_VERBOSE"
