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

import logging
from typing import Optional

from dgraphhelper.clients.admin import AdminClient
from dgraphhelper.clients.launcher import InstanceLauncher
from dgraphhelper.exceptions import InstanceNotReadyError, InstanceNotStartedError
from dgraphhelper.models import InstanceHandle
from dgraphhelper.utils.log import get_logger


class DgraphInstance:
    """
    A throwaway Dgraph server for one test or test session.

    Wraps the launcher and the admin client around a single container:

        with DgraphInstance(schema=SCHEMA) as dgraph:
            ...  # query http://localhost:<dgraph.port>
            dgraph.drop_data()
    """

    def __init__(
        self,
        image: Optional[str] = None,
        launcher: Optional[InstanceLauncher] = None,
        schema: Optional[str] = None,
        require_ready: bool = False,
        pull: bool = False,
        verbose: bool = False,
    ):
        """
        Args:
            image: Image reference; the launcher's pinned default when None.
            launcher: Launcher to use (default: one configured from the environment).
            schema: Schema loaded right after start, if given.
            require_ready: Fail start() when the endpoint never answers.
            pull: Pull the image if it is not cached.
            verbose: Enable debug logging.
        """
        self.image = image
        self.schema = schema
        self.require_ready = require_ready
        self.pull = pull
        self.verbose = verbose

        level = logging.DEBUG if verbose else logging.INFO
        self.logger = get_logger(__name__, level=level)

        self._owns_launcher = launcher is None
        self.launcher = launcher or InstanceLauncher(verbose=verbose)
        self.handle: Optional[InstanceHandle] = None
        self._admin: Optional[AdminClient] = None

    @property
    def port(self) -> int:
        return self._require_handle().port

    @property
    def url(self) -> str:
        return self._require_handle().base_url

    def start(self) -> InstanceHandle:
        """Launch the container (if not already running) and load the initial schema."""
        if self.handle:
            return self.handle

        try:
            self.handle = self.launcher.start(
                image=self.image,
                require_ready=self.require_ready,
                pull=self.pull,
            )
        except InstanceNotReadyError as e:
            # The container is running even though it never answered
            self.handle = e.handle
            self.logger.error(f"Dgraph at {e.handle.base_url} never became ready, removing it")
            self.stop()
            raise

        self._admin = AdminClient(self.handle, verbose=self.verbose)
        self.logger.info(f"Dgraph running at {self.handle.base_url} ({self.handle.instance_id})")

        if self.schema:
            try:
                self._admin.load_schema(self.schema)
            except BaseException:
                self.logger.error("Initial schema load failed, removing the container")
                self.stop()
                raise
        return self.handle

    def _require_handle(self) -> InstanceHandle:
        if not self.handle:
            raise InstanceNotStartedError("Dgraph instance has not been started")
        return self.handle

    def _require_admin(self) -> AdminClient:
        self._require_handle()
        return self._admin

    def load_schema(self, schema: str) -> bool:
        return self._require_admin().load_schema(schema)

    def drop_data(self):
        self._require_admin().drop_data()

    def drop_all(self):
        self._require_admin().drop_all()

    def stop(self):
        """Stop and remove the container. The handle is discarded either way."""
        if not self.handle:
            return

        handle, admin = self.handle, self._admin
        self.handle = None
        self._admin = None
        if admin:
            admin.close()
        try:
            self.launcher.teardown(handle)
        finally:
            if self._owns_launcher:
                self.launcher.close()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
