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

"""
Configuration for the Docker daemon connection and the pytest fixtures
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from docker.utils import kwargs_from_env
from dotenv import load_dotenv

import dgraphhelper.constants as constants


_TRUTHY = ("1", "true", "yes", "on")


def _flag(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in _TRUTHY


@dataclass
class RuntimeConfig:
    """How to reach the Docker daemon.

    Every field left as None falls back to the Docker SDK default (local socket,
    no TLS). ``api_version="auto"`` lets the daemon negotiate the API version.
    """
    docker_host: Optional[str] = None
    tls_verify: bool = False
    cert_path: Optional[str] = None
    api_version: str = constants.DEFAULT_API_VERSION
    timeout: int = constants.DEFAULT_DOCKER_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RuntimeConfig":
        """Build a config from DOCKER_* variables (a .env file is loaded first)"""
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            docker_host=environ.get(constants.DOCKER_HOST_ENV) or None,
            tls_verify=_flag(environ.get(constants.DOCKER_TLS_VERIFY_ENV)),
            cert_path=environ.get(constants.DOCKER_CERT_PATH_ENV) or None,
            api_version=environ.get(constants.DOCKER_API_VERSION_ENV) or constants.DEFAULT_API_VERSION,
        )

    def client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``docker.DockerClient``"""
        environment = {}
        if self.docker_host:
            environment[constants.DOCKER_HOST_ENV] = self.docker_host
        if self.tls_verify:
            environment[constants.DOCKER_TLS_VERIFY_ENV] = "1"
        if self.cert_path:
            environment[constants.DOCKER_CERT_PATH_ENV] = self.cert_path

        # kwargs_from_env falls back to os.environ when handed an empty mapping
        kwargs = kwargs_from_env(environment=environment) if environment else {}
        kwargs["version"] = self.api_version
        kwargs["timeout"] = self.timeout
        return kwargs


@dataclass
class FixtureSettings:
    image: str = constants.DEFAULT_IMAGE
    require_ready: bool = False
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FixtureSettings":
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            image=environ.get(constants.DGRAPH_IMAGE_ENV) or constants.DEFAULT_IMAGE,
            require_ready=_flag(environ.get(constants.DGRAPH_REQUIRE_READY_ENV)),
            verbose=_flag(environ.get(constants.DGRAPH_VERBOSE_ENV)),
        )
