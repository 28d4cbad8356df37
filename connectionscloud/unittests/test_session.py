#  This file is part of ConnectionsCloud.
#  ConnectionsCloud is free software: you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation, either version 3 of the License, or
#  (at your option) any later version.
#  ConnectionsCloud is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#  You should have received a copy of the GNU General Public License
#  along with ConnectionsCloud.  If not, see <http://www.gnu.org/licenses/>.

"""Unit tests for the login handshake and re-login scheduling."""

import pytest
from unittest.mock import Mock, patch

import requests as requests_lib
from requests.auth import HTTPBasicAuth

import connectionscloud
from connectionscloud.clients.http_wrapper import HTTPClientWrapper, AuthError, HTTPConnectionError
from connectionscloud.clients.session import (
    SessionManager, LOGIN_PATH, APP_PASSWORD_LOGIN_PATH, APP_ID_HEADER
)
from connectionscloud.config.settings import ConfigError
from connectionscloud.unittests.fakes import FakeSession, make_response, USERNAME, PASSWORD

BASE_URL = 'https://apps.example.com'


def make_manager(fake_session, scheduler, **kwargs):
    http = HTTPClientWrapper('Test', session=fake_session)
    return SessionManager(BASE_URL, USERNAME, PASSWORD, http=http, scheduler=scheduler, **kwargs)


@pytest.fixture
def log_capture():
    """Collect log messages in LOGLIST at normal log level."""
    original_loglevel = connectionscloud.LOGLEVEL
    connectionscloud.LOGLEVEL = 1
    del connectionscloud.LOGLIST[:]
    yield connectionscloud.LOGLIST
    connectionscloud.LOGLEVEL = original_loglevel
    del connectionscloud.LOGLIST[:]


class TestStandardLogin:

    def test_posts_login_form(self, fake_session, scheduler):
        fake_session.route(LOGIN_PATH, make_response(302, b'', 'Found'))
        manager = make_manager(fake_session, scheduler)

        manager.login()

        method, url, kwargs = fake_session.calls[0]
        assert method == 'POST'
        assert url == BASE_URL + LOGIN_PATH
        assert kwargs['data'] == {
            'login-form-type': 'pwd',
            'error-code': '',
            'username': USERNAME,
            'password': PASSWORD,
            'show_login': 'showLoginAgain',
        }
        assert kwargs['allow_redirects'] is False
        assert kwargs.get('auth') is None
        assert not kwargs.get('headers')

    @pytest.mark.parametrize('status', [200, 302])
    def test_ok_statuses_log_in(self, fake_session, scheduler, status):
        fake_session.route(LOGIN_PATH, make_response(status))
        manager = make_manager(fake_session, scheduler)

        manager.login()

        assert manager.relogin_scheduled

    @pytest.mark.parametrize('status', [401, 403, 500])
    def test_other_statuses_raise_auth_error(self, fake_session, scheduler, status):
        fake_session.route(LOGIN_PATH, make_response(status, b'bad credentials', 'Nope'))
        manager = make_manager(fake_session, scheduler)

        with pytest.raises(AuthError) as exc_info:
            manager.login()

        assert exc_info.value.status_code == status
        assert exc_info.value.response_body == 'bad credentials'
        assert not manager.relogin_scheduled
        scheduler.add_job.assert_not_called()
        assert len(fake_session.calls) == 1

    def test_transport_failure_propagates(self, fake_session, scheduler):
        fake_session.route(LOGIN_PATH, requests_lib.exceptions.ConnectionError('refused'))
        manager = make_manager(fake_session, scheduler)

        with pytest.raises(HTTPConnectionError):
            manager.login()

        assert not manager.relogin_scheduled


class TestAppPasswordLogin:

    def test_requires_app_id(self, fake_session, scheduler):
        with pytest.raises(ConfigError):
            make_manager(fake_session, scheduler, is_app_password=True)

    def test_gets_with_app_id_and_basic_auth(self, fake_session, scheduler):
        fake_session.route(APP_PASSWORD_LOGIN_PATH, make_response(200))
        manager = make_manager(fake_session, scheduler, is_app_password=True, app_id='my-app')

        manager.login()

        assert len(fake_session.calls) == 1
        method, url, kwargs = fake_session.calls[0]
        assert method == 'GET'
        assert url == BASE_URL + APP_PASSWORD_LOGIN_PATH
        assert kwargs['headers'] == {APP_ID_HEADER: 'my-app'}
        assert isinstance(kwargs['auth'], HTTPBasicAuth)
        assert kwargs['auth'].username == USERNAME
        assert kwargs['auth'].password == PASSWORD

    def test_basic_auth_is_sent_on_first_request(self, fake_session, scheduler):
        """The auth object adds the header itself, no 401 challenge needed."""
        fake_session.route(APP_PASSWORD_LOGIN_PATH, make_response(200))
        manager = make_manager(fake_session, scheduler, is_app_password=True, app_id='my-app')
        manager.login()

        auth = fake_session.calls[0][2]['auth']
        prepared = auth(requests_lib.Request('GET', BASE_URL + APP_PASSWORD_LOGIN_PATH).prepare())
        assert prepared.headers['Authorization'].startswith('Basic ')


class TestCredentialLogging:

    def test_password_is_never_logged(self, fake_session, scheduler, log_capture):
        fake_session.route(LOGIN_PATH, make_response(302))
        manager = make_manager(fake_session, scheduler)

        manager.login()

        messages = [entry[6] for entry in log_capture]
        assert any(USERNAME in message for message in messages)
        assert any('********' in message for message in messages)
        assert not any(PASSWORD in message for message in messages)

    def test_password_is_not_logged_on_failure(self, fake_session, scheduler, log_capture):
        fake_session.route(LOGIN_PATH, make_response(401, b'', 'Unauthorized'))
        manager = make_manager(fake_session, scheduler)

        with pytest.raises(AuthError):
            manager.login()

        assert not any(PASSWORD in entry[6] for entry in log_capture)

    def test_rejected_login_is_logged_with_status(self, fake_session, scheduler, log_capture):
        fake_session.route(LOGIN_PATH, make_response(403, b'', 'Forbidden'))
        manager = make_manager(fake_session, scheduler)

        with pytest.raises(AuthError) as exc_info:
            manager.login()

        assert 'returned error 403: Forbidden' in str(exc_info.value)
        errors = [entry[6] for entry in log_capture if entry[1] == 'ERROR']
        assert any('returned error 403: Forbidden' in message for message in errors)


class TestRelogin:

    def test_schedules_twelve_hour_interval(self, fake_session, scheduler):
        fake_session.route(LOGIN_PATH, make_response(302))
        manager = make_manager(fake_session, scheduler)

        manager.login()

        scheduler.add_job.assert_called_once()
        args, kwargs = scheduler.add_job.call_args
        assert args[0] == manager._relogin
        assert args[1] == 'interval'
        assert kwargs['hours'] == 12

    def test_repeated_logins_keep_one_job(self, fake_session, scheduler):
        fake_session.route(LOGIN_PATH, make_response(302))
        manager = make_manager(fake_session, scheduler)

        manager.login()
        manager.login()
        manager._relogin()

        assert scheduler.add_job.call_count == 1
        assert len(fake_session.calls) == 3

    def test_background_failure_is_logged_not_raised(self, fake_session, scheduler, log_capture):
        manager = make_manager(fake_session, scheduler)
        fake_session.route(LOGIN_PATH, make_response(500, b'', 'Server Error'))

        manager._relogin()

        assert any('re-login' in entry[6] for entry in log_capture if entry[1] == 'ERROR')

    def test_shutdown_cancels_job_and_closes_session(self, fake_session, scheduler):
        fake_session.route(LOGIN_PATH, make_response(302))
        manager = make_manager(fake_session, scheduler)
        manager.login()
        job = scheduler.add_job.return_value

        manager.shutdown()

        job.remove.assert_called_once()
        assert not manager.relogin_scheduled
        assert fake_session.closed
        # a scheduler passed in belongs to the caller
        scheduler.shutdown.assert_not_called()

    def test_no_rescheduling_after_shutdown(self, fake_session, scheduler):
        fake_session.route(LOGIN_PATH, make_response(302))
        manager = make_manager(fake_session, scheduler)
        manager.shutdown()

        manager.login()

        scheduler.add_job.assert_not_called()

    @patch('connectionscloud.clients.session.BackgroundScheduler')
    def test_owned_scheduler_started_and_stopped(self, mock_scheduler_class, fake_session):
        owned = mock_scheduler_class.return_value
        owned.running = False
        fake_session.route(LOGIN_PATH, make_response(302))
        manager = make_manager(fake_session, None)

        manager.login()
        owned.start.assert_called_once()

        owned.running = True
        manager.shutdown()
        owned.shutdown.assert_called_once_with(wait=False)

    def test_custom_interval(self, fake_session, scheduler):
        fake_session.route(LOGIN_PATH, make_response(302))
        manager = make_manager(fake_session, scheduler, relogin_hours=6)

        manager.login()

        assert scheduler.add_job.call_args[1]['hours'] == 6


class TestCookies:

    def test_cookies_are_the_session_jar(self, scheduler):
        fake = FakeSession()
        fake.cookies.set('LtpaToken2', 'abc', domain='apps.example.com')
        manager = make_manager(fake, scheduler)

        assert manager.cookies is fake.cookies
        assert len(manager.cookies) == 1
