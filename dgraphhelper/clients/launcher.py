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
Docker-backed launcher for throwaway Dgraph containers.

Each top-level call opens its own Docker client and closes it before
returning; nothing is shared between calls.
"""

import dataclasses
import time
from typing import Any, Callable, Optional

import docker
from docker.errors import DockerException, ImageNotFound

import dgraphhelper.constants as constants
from dgraphhelper.clients.readiness import ReadinessPoller
from dgraphhelper.config import RuntimeConfig
from dgraphhelper.exceptions import (
    ContainerCreateError,
    ContainerRemoveError,
    ContainerStartError,
    ContainerStopError,
    InstanceNotReadyError,
    RuntimeConnectionError,
)
from dgraphhelper.models import InstanceHandle, Readiness
from dgraphhelper.utils.log import get_logger, set_verbose
from dgraphhelper.utils.ports import allocate_free_port


def default_client_factory(config: RuntimeConfig) -> docker.DockerClient:
    """Open a Docker client; with api_version "auto" this negotiates with the daemon."""
    return docker.DockerClient(**config.client_kwargs())


class InstanceLauncher:
    """Creates, starts, stops and removes Dgraph containers."""

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        client_factory: Optional[Callable[[RuntimeConfig], Any]] = None,
        readiness: Optional[ReadinessPoller] = None,
        sleep: Callable[[float], None] = time.sleep,
        grace_period: float = constants.STARTUP_GRACE,
        verbose: bool = False,
    ):
        """Initialize the launcher.

        Args:
            config: Docker daemon connection settings (default: read from DOCKER_* env).
            client_factory: Builds a Docker client from ``config``; tests substitute a fake.
            readiness: Poller run after the container starts.
            sleep: Used for the post-start grace period.
            grace_period: Seconds to wait after start before polling.
            verbose: Enable debug logging.
        """
        self.config = config or RuntimeConfig.from_env()
        self.client_factory = client_factory or default_client_factory
        self.sleep = sleep
        self.grace_period = grace_period
        self._owns_readiness = readiness is None
        self.readiness = readiness or ReadinessPoller(sleep=sleep, verbose=verbose)
        self.logger = set_verbose(get_logger(f"{__name__}.InstanceLauncher"), verbose)

    def _connect(self):
        try:
            return self.client_factory(self.config)
        except DockerException as e:
            self.logger.error(f"Failed to connect to Docker: {e}")
            raise RuntimeConnectionError(f"Failed to connect to Docker: {e}") from e

    def start(
        self,
        image: Optional[str] = None,
        require_ready: bool = False,
        pull: bool = False,
    ) -> InstanceHandle:
        """Create and start a Dgraph container and wait for its HTTP endpoint.

        Args:
            image: Image reference (default: the pinned dgraph/standalone build).
                Unless ``pull`` is set the image must already be in the local cache.
            require_ready: Raise InstanceNotReadyError instead of returning a
                handle with ``ready=False`` when polling runs out.
            pull: Pull the image first if it is not cached.

        Returns:
            InstanceHandle for the running container.

        Raises:
            AllocationError: If no local port is free.
            RuntimeConnectionError: If the Docker daemon is unreachable.
            ContainerCreateError: If the container cannot be created.
            ContainerStartError: If the container cannot be started. The
                created container is left in place.
            InstanceNotReadyError: Only when ``require_ready`` is set.
        """
        image = image or constants.DEFAULT_IMAGE
        port = allocate_free_port()
        self.logger.info(f"Starting dgraph container from {image} on port {port}")

        client = self._connect()
        try:
            if pull:
                self._ensure_image(client, image)
            instance_id = self._create(client, image, port)
            self._start(client, instance_id)
        finally:
            client.close()

        handle = InstanceHandle(port=port, instance_id=instance_id)

        # Give the process time to boot before the first probe
        self.sleep(self.grace_period)
        readiness = self.readiness.wait(handle.base_url)
        handle = dataclasses.replace(handle, ready=readiness is Readiness.READY)

        if require_ready and not handle.ready:
            raise InstanceNotReadyError(handle)
        return handle

    def _ensure_image(self, client, image: str):
        try:
            client.images.get(image)
            return
        except ImageNotFound:
            self.logger.info(f"Image {image} not cached, pulling")
        except DockerException as e:
            raise ContainerCreateError(f"Failed to inspect image {image}: {e}") from e

        try:
            client.images.pull(image)
        except DockerException as e:
            self.logger.error(f"Failed to pull image {image}: {e}")
            raise ContainerCreateError(f"Failed to pull image {image}: {e}") from e

    def _create(self, client, image: str, port: int) -> str:
        service_port = f"{constants.SERVICE_PORT}/tcp"
        try:
            host_config = client.api.create_host_config(
                port_bindings={service_port: (constants.BIND_HOST, port)}
            )
            container = client.api.create_container(
                image=image,
                ports=[constants.SERVICE_PORT],
                host_config=host_config,
            )
        except DockerException as e:
            self.logger.error(f"Failed to create container from {image}: {e}")
            raise ContainerCreateError(f"Failed to create container from {image}: {e}") from e

        instance_id = container["Id"]
        self.logger.debug(f"Created container {instance_id}")
        return instance_id

    def _start(self, client, instance_id: str):
        try:
            client.api.start(instance_id)
        except DockerException as e:
            self.logger.error(f"Failed to start container {instance_id}: {e}")
            raise ContainerStartError(
                f"Failed to start container {instance_id}: {e}", instance_id=instance_id
            ) from e

    def stop(self, handle: InstanceHandle):
        """Stop the container behind ``handle``."""
        client = self._connect()
        try:
            self._stop(client, handle)
        finally:
            client.close()

    def remove(self, handle: InstanceHandle):
        """Remove the (stopped) container behind ``handle``."""
        client = self._connect()
        try:
            self._remove(client, handle)
        finally:
            client.close()

    def teardown(self, handle: InstanceHandle):
        """Stop then remove the container behind ``handle`` over one connection."""
        self.logger.info(f"Stopping and removing dgraph container {handle.instance_id}")
        client = self._connect()
        try:
            self._stop(client, handle)
            self._remove(client, handle)
        finally:
            client.close()

    def _stop(self, client, handle: InstanceHandle):
        try:
            client.api.stop(handle.instance_id)
        except DockerException as e:
            self.logger.error(f"Failed to stop container {handle.instance_id}: {e}")
            raise ContainerStopError(
                f"Failed to stop container {handle.instance_id}: {e}",
                instance_id=handle.instance_id,
            ) from e

    def _remove(self, client, handle: InstanceHandle):
        try:
            client.api.remove_container(handle.instance_id)
        except DockerException as e:
            self.logger.error(f"Failed to remove container {handle.instance_id}: {e}")
            raise ContainerRemoveError(
                f"Failed to remove container {handle.instance_id}: {e}",
                instance_id=handle.instance_id,
            ) from e

    def close(self):
        """Release the HTTP session of the readiness poller this launcher created."""
        if self._owns_readiness:
            self.readiness.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
