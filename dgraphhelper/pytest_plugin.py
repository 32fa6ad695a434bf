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
Pytest fixtures for Dgraph-backed tests.

Installed through the ``pytest11`` entry point, so any project that depends on
this package gets:

- ``dgraph_settings``: image and flags read from DGRAPH_* environment variables
- ``dgraph_instance``: one container for the whole session
- ``dgraph``: the session container, emptied (data and schema) before each test
"""
from typing import Iterator

import pytest

from dgraphhelper.config import FixtureSettings
from dgraphhelper.instance import DgraphInstance


@pytest.fixture(scope="session")
def dgraph_settings() -> FixtureSettings:
    return FixtureSettings.from_env()


@pytest.fixture(scope="session")
def dgraph_instance(dgraph_settings: FixtureSettings) -> Iterator[DgraphInstance]:
    instance = DgraphInstance(
        image=dgraph_settings.image,
        require_ready=dgraph_settings.require_ready,
        verbose=dgraph_settings.verbose,
    )
    instance.start()
    try:
        yield instance
    finally:
        instance.stop()


@pytest.fixture
def dgraph(dgraph_instance: DgraphInstance) -> DgraphInstance:
    dgraph_instance.drop_all()
    return dgraph_instance
