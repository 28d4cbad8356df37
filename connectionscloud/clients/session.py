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

"""
Login handling for Connections Cloud.

A SessionManager owns the account credentials and the cookie store of one
client. It performs the login handshake and keeps the session alive by
logging in again on a fixed interval until it is shut down.
"""

import threading

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from requests.auth import HTTPBasicAuth

from connectionscloud import logger
from connectionscloud.clients.http_wrapper import HTTPClientWrapper, HTTPClientError, AuthError
from connectionscloud.config.settings import ConfigError
from connectionscloud.formatter import mask_secret, plural
from connectionscloud.utils.url_builder import URLBuilder

LOGIN_PATH = '/pkmslogin.form'
APP_PASSWORD_LOGIN_PATH = '/eai/auth/basicMobile'
APP_ID_HEADER = 'IBM-APP-ID'

# pkmslogin.form answers a good login with a redirect
LOGIN_OK_CODES = (200, 302)
RELOGIN_HOURS = 12


class SessionManager:
    """
    Authenticated session against a Connections Cloud server.

    Standard accounts log in by posting the login form; application
    passwords use preemptive basic auth plus the application id header.
    Cookies returned by the server are kept in the wrapper's session and
    replayed on every later request.
    """

    CLIENT_NAME = 'Connections Cloud'

    def __init__(self, base_url, username, password, is_app_password=False, app_id=None,
                 http=None, scheduler=None, relogin_hours=RELOGIN_HOURS):
        """
        Args:
            base_url: Server URL, e.g. https://apps.na.collabserv.com
            username: Account login
            password: Account password or application password
            is_app_password: True when password is an application password
            app_id: Application id sent with application password logins
            http: Optional HTTPClientWrapper (default: a new one)
            scheduler: Optional APScheduler scheduler to run re-logins on.
                When omitted the manager creates and owns one.
            relogin_hours: Hours between background re-logins
        """
        if is_app_password and not app_id:
            raise ConfigError("An application id is required when using an application password")

        self.base_url = base_url
        self.username = username
        self.password = password
        self.is_app_password = is_app_password
        self.app_id = app_id
        self.relogin_hours = relogin_hours
        self.http = http if http is not None else HTTPClientWrapper(self.CLIENT_NAME)

        self._scheduler = scheduler
        self._owns_scheduler = scheduler is None
        self._job = None
        self._closed = False
        # serializes logins, the only writer of the cookie store
        self._login_lock = threading.Lock()
        self._job_lock = threading.Lock()

    @property
    def cookies(self):
        return self.http.cookies

    @property
    def login_path(self):
        return APP_PASSWORD_LOGIN_PATH if self.is_app_password else LOGIN_PATH

    @property
    def relogin_scheduled(self):
        return self._job is not None

    def login_form(self):
        """Form fields posted by a standard account login."""
        return {
            'login-form-type': 'pwd',
            'error-code': '',
            'username': self.username,
            'password': self.password,
            'show_login': 'showLoginAgain',
        }

    def login(self):
        """
        Log in and schedule the periodic re-login.

        Raises:
            AuthError: If the server rejects the login
            TransportError: If the server cannot be reached
        """
        url = URLBuilder.append_path(self.base_url, self.login_path)

        logger.info('Logging in to %s' % url)
        logger.info('user %s' % self.username)
        logger.info('using %s' % mask_secret(self.password))

        with self._login_lock:
            if self.is_app_password:
                response = self.http.get(url, headers={APP_ID_HEADER: self.app_id},
                                         auth=HTTPBasicAuth(self.username, self.password))
            else:
                # keep the redirect, it is the success signal
                response = self.http.post(url, data=self.login_form(), allow_redirects=False)

            self.http.check_response_ok(response, LOGIN_OK_CODES, AuthError)

            count = len(self.cookies)
            logger.info('Successfully logged in %s' % self.username)
            logger.debug('received %d cookie%s' % (count, plural(count)))

        self._schedule_relogin()

    def _schedule_relogin(self):
        with self._job_lock:
            if self._closed or self._job is not None:
                return
            if self._scheduler is None:
                self._scheduler = BackgroundScheduler(job_defaults={'misfire_grace_time': 30})
            self._job = self._scheduler.add_job(
                self._relogin, 'interval', hours=self.relogin_hours,
                name='RELOGIN-%s' % self.username)
            if self._owns_scheduler and not self._scheduler.running:
                self._scheduler.start()
            logger.debug('Re-login for %s scheduled every %s hour%s' % (
                self.username, self.relogin_hours, plural(self.relogin_hours)))

    def _relogin(self):
        try:
            self.login()
        except HTTPClientError as e:
            logger.error('Scheduled re-login of %s failed: %s' % (self.username, str(e)))

    def shutdown(self):
        """Cancel the re-login job and release the HTTP session."""
        with self._job_lock:
            self._closed = True
            if self._job is not None:
                try:
                    self._job.remove()
                except JobLookupError:
                    pass
                self._job = None
            if self._owns_scheduler and self._scheduler is not None and self._scheduler.running:
                self._scheduler.shutdown(wait=False)
        self.http.close()
        logger.debug('Session for %s closed' % self.username)
