#  This file is part of ConnectionsCloud.
#
#  ConnectionsCloud is free software: you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation, either version 3 of the License, or
#  (at your option) any later version.
#
#  ConnectionsCloud is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with ConnectionsCloud.  If not, see <http://www.gnu.org/licenses/>.

"""
Pytest configuration and shared fixtures for ConnectionsCloud tests.
"""

import os
import sys
import tempfile
import shutil
from unittest.mock import Mock

import pytest

# Ensure connectionscloud package is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import connectionscloud
from connectionscloud.cloud import ConnectionsCloud
from connectionscloud.unittests.fakes import FakeSession, SERVER, USERNAME, PASSWORD


@pytest.fixture(scope='session', autouse=True)
def setup_connectionscloud_globals():
    """Initialize ConnectionsCloud global variables needed for tests."""
    datadir = tempfile.mkdtemp(prefix='cc_test_')
    connectionscloud.LOGLEVEL = 0  # Disable debug logging during tests
    connectionscloud.CONFIG.setdefault('LOGLIMIT', 500)
    connectionscloud.CONFIG['LOGDIR'] = os.path.join(datadir, 'Logs')

    yield

    shutil.rmtree(datadir, ignore_errors=True)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def scheduler():
    return Mock()


@pytest.fixture
def client(fake_session, scheduler):
    """A ConnectionsCloud client whose HTTP session is a FakeSession."""
    cloud = ConnectionsCloud(SERVER, USERNAME, PASSWORD, scheduler=scheduler)
    cloud.session.http.session = fake_session
    yield cloud
    cloud.close()
