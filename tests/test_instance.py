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
from unittest.mock import Mock, patch

from dgraphhelper.exceptions import (
    ContainerStopError,
    InstanceNotReadyError,
    InstanceNotStartedError,
    SchemaLoadError,
)
from dgraphhelper.instance import DgraphInstance
from dgraphhelper.models import InstanceHandle


class TestDgraphInstance(unittest.TestCase):
    """Test DgraphInstance lifecycle and delegation to the admin client."""

    def setUp(self):
        self.handle = InstanceHandle(port=45678, instance_id="container-123")
        self.launcher = Mock()
        self.launcher.start.return_value = self.handle

        patcher = patch("dgraphhelper.instance.AdminClient")
        self.mock_admin_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.admin = self.mock_admin_class.return_value

    def test_start_loads_initial_schema(self):
        """start() should launch the container and load the schema given at init."""
        instance = DgraphInstance(launcher=self.launcher, schema="type User { id: ID! }")

        self.assertEqual(instance.start(), self.handle)

        self.launcher.start.assert_called_once_with(image=None, require_ready=False, pull=False)
        self.mock_admin_class.assert_called_once_with(self.handle, verbose=False)
        self.admin.load_schema.assert_called_once_with("type User { id: ID! }")
        self.assertEqual(instance.port, 45678)
        self.assertEqual(instance.url, "http://localhost:45678")

    def test_start_is_idempotent(self):
        """A second start() on a running instance should not launch another container."""
        instance = DgraphInstance(launcher=self.launcher)
        instance.start()
        instance.start()
        self.launcher.start.assert_called_once()
        self.admin.load_schema.assert_not_called()

    def test_operations_before_start(self):
        """Admin operations and properties should fail before start()."""
        instance = DgraphInstance(launcher=self.launcher)
        with self.assertRaises(InstanceNotStartedError):
            instance.drop_data()
        with self.assertRaises(InstanceNotStartedError):
            instance.load_schema("type A { id: ID! }")
        with self.assertRaises(InstanceNotStartedError):
            _ = instance.port

    def test_operations_delegate_to_admin(self):
        """load_schema, drop_data and drop_all should go through the admin client."""
        instance = DgraphInstance(launcher=self.launcher)
        instance.start()

        instance.load_schema("type A { id: ID! }")
        instance.drop_data()
        instance.drop_all()

        self.admin.load_schema.assert_called_once_with("type A { id: ID! }")
        self.admin.drop_data.assert_called_once()
        self.admin.drop_all.assert_called_once()

    def test_context_manager_tears_down(self):
        """Leaving the with-block should stop and remove the container."""
        with DgraphInstance(launcher=self.launcher, image="dgraph/standalone:v23.1.0") as instance:
            self.assertIs(instance.handle, self.handle)

        self.launcher.start.assert_called_once_with(
            image="dgraph/standalone:v23.1.0", require_ready=False, pull=False
        )
        self.launcher.teardown.assert_called_once_with(self.handle)
        self.admin.close.assert_called_once()
        self.assertIsNone(instance.handle)

    def test_stop_without_start_is_noop(self):
        """stop() on an instance that never started should do nothing."""
        DgraphInstance(launcher=self.launcher).stop()
        self.launcher.teardown.assert_not_called()

    def test_handle_discarded_even_if_teardown_fails(self):
        """The handle should not be reused after a failed teardown."""
        self.launcher.teardown.side_effect = ContainerStopError("gone", instance_id="container-123")
        instance = DgraphInstance(launcher=self.launcher)
        instance.start()

        with self.assertRaises(ContainerStopError):
            instance.stop()
        self.assertIsNone(instance.handle)

    def test_injected_launcher_is_not_closed(self):
        """A launcher passed in by the caller stays open after stop()."""
        instance = DgraphInstance(launcher=self.launcher)
        instance.start()
        instance.stop()
        self.launcher.close.assert_not_called()


class TestFailedStartCleanup(unittest.TestCase):
    """Test that a container started by start() is removed when start() fails."""

    def setUp(self):
        self.handle = InstanceHandle(port=45678, instance_id="container-123")
        self.launcher = Mock()
        self.launcher.start.return_value = self.handle

        patcher = patch("dgraphhelper.instance.AdminClient")
        self.mock_admin_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.admin = self.mock_admin_class.return_value

    def test_schema_failure_in_with_block_removes_container(self):
        """A failing initial schema load inside __enter__ should still tear down."""
        self.admin.load_schema.side_effect = SchemaLoadError(["bad schema"])

        with self.assertRaises(SchemaLoadError):
            with DgraphInstance(launcher=self.launcher, schema="type Broken {"):
                self.fail("with-block body should not run")

        self.launcher.teardown.assert_called_once_with(self.handle)
        self.admin.close.assert_called_once()

    def test_schema_failure_clears_handle(self):
        """After a failed initial schema load the instance is back to not started."""
        self.admin.load_schema.side_effect = SchemaLoadError(["bad schema"])
        instance = DgraphInstance(launcher=self.launcher, schema="type Broken {")

        with self.assertRaises(SchemaLoadError):
            instance.start()

        self.assertIsNone(instance.handle)
        with self.assertRaises(InstanceNotStartedError):
            instance.drop_all()

    def test_not_ready_removes_container(self):
        """With require_ready, a container that never answered should be torn down."""
        not_ready = InstanceHandle(port=45678, instance_id="container-123", ready=False)
        self.launcher.start.side_effect = InstanceNotReadyError(not_ready)

        with self.assertRaises(InstanceNotReadyError):
            with DgraphInstance(launcher=self.launcher, require_ready=True):
                self.fail("with-block body should not run")

        self.launcher.start.assert_called_once_with(image=None, require_ready=True, pull=False)
        self.launcher.teardown.assert_called_once_with(not_ready)
        self.mock_admin_class.assert_not_called()


class TestOwnedLauncher(unittest.TestCase):
    """Test that a launcher created by DgraphInstance is closed on stop()."""

    @patch("dgraphhelper.instance.AdminClient")
    @patch("dgraphhelper.instance.InstanceLauncher")
    def test_owned_launcher_closed_on_stop(self, mock_launcher_class, mock_admin_class):
        """stop() should close the default launcher after teardown."""
        launcher = mock_launcher_class.return_value
        launcher.start.return_value = InstanceHandle(port=45678, instance_id="container-123")

        instance = DgraphInstance(verbose=True)
        instance.start()
        instance.stop()

        mock_launcher_class.assert_called_once_with(verbose=True)
        launcher.teardown.assert_called_once()
        launcher.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
