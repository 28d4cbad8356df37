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
Connections Cloud client.

Builds the resource paths for communities, blogs, forums, profiles and wikis
and runs them through the session's RequestExecutor.
"""

from connectionscloud import logger
from connectionscloud.clients.content import ContentResolver, DEFAULT_WORKERS
from connectionscloud.clients.executor import RequestExecutor
from connectionscloud.clients.http_wrapper import HTTPClientWrapper
from connectionscloud.clients.session import SessionManager, RELOGIN_HOURS
from connectionscloud.formatter import plural
from connectionscloud.utils.url_builder import URLBuilder, build_query


class ConnectionsCloud:
    """
    Client for one Connections Cloud account.

    Call login() before reading resources and close() when done, or use the
    client as a context manager. Every read returns a RequestOutcome; check
    outcome.accessible before assuming an empty item list means no data.
    """

    CLIENT_NAME = 'Connections Cloud'

    def __init__(self, server, username, password, is_app_password=False, app_id=None,
                 formatter=None, timeout=None, verify_ssl=True, relogin_hours=RELOGIN_HOURS,
                 content_workers=DEFAULT_WORKERS, scheduler=None):
        self.base_url = URLBuilder.normalize_host(server, use_https=True)
        http = HTTPClientWrapper(self.CLIENT_NAME, timeout=timeout, verify_ssl=verify_ssl)
        self.session = SessionManager(self.base_url, username, password,
                                      is_app_password=is_app_password, app_id=app_id,
                                      http=http, scheduler=scheduler, relogin_hours=relogin_hours)
        self.executor = RequestExecutor(self.session, formatter)
        self.content = ContentResolver(self.executor, max_workers=content_workers)

    @classmethod
    def from_config(cls, config, **kwargs):
        """Build a client from a validated Configuration."""
        config.validate()
        return cls(config.server.server, config.server.user, config.server.password,
                   is_app_password=config.server.app_password,
                   app_id=config.server.app_id or None,
                   timeout=config.http.timeout or None,
                   verify_ssl=config.http.ssl_verify,
                   relogin_hours=config.http.relogin_hours,
                   content_workers=config.http.content_workers,
                   **kwargs)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def login(self):
        self.session.login()

    def close(self):
        self.session.shutdown()

    def _execute(self, path, formatted=True):
        return self.executor.execute(path, formatted=formatted)

    # Communities

    def community_apps(self, handle):
        """Applications (blog, wiki, forum...) added to a community."""
        return self._execute('/communities/service/atom/community/remoteApplications?communityUuid=%s' % handle)

    # Blogs

    def blog_entries(self, handle, options=None):
        return self._execute('/blogs/%s/feed/entries/atom?%s' % (handle, build_query(options)))

    def blog_comments(self, handle, options=None):
        return self._execute('/blogs/%s/feed/comments/atom?%s' % (handle, build_query(options)))

    def blog_entry(self, handle, entry, options=None):
        return self._execute('/blogs/%s/api/entries/%s?%s' % (handle, entry, build_query(options)))

    def blog_entry_comments(self, handle, entry, options=None):
        return self._execute('/blogs/%s/api/entrycomments/%s?%s' % (handle, entry, build_query(options)))

    # Forums

    def forum_topics(self, handle, options=None):
        return self._execute('/forums/atom/topics?forumUuid=%s&%s' % (handle, build_query(options)))

    def forum_topic(self, handle, include_replies=False, options=None):
        """A forum topic, or its replies when include_replies is set."""
        feed = 'replies' if include_replies else 'topic'
        return self._execute('/forums/atom/%s?topicUuid=%s&%s' % (feed, handle, build_query(options)))

    # Profiles

    def profile_tags(self, userid):
        """
        Tags of a profile.

        The tags feed is keyed on the profile's internal id, so the profile
        is read first to translate the external userid. An inaccessible or
        empty profile is returned as is, without asking for tags.
        """
        profile = self._execute('/profiles/atom/profile.do?userid=%s' % userid)
        if not profile.items:
            logger.warn('No profile found for userid %s, skipping tags' % userid)
            return profile

        target = profile.items[0]['id']
        logger.debug('profile %s has key %s' % (userid, target))
        return self._execute('/profiles/atom/profileTags.do?targetKey=%s' % target)

    # Wikis

    def wiki_pages(self, handle, download_content=True, options=None):
        """
        Pages of a wiki.

        With download_content every page body is downloaded concurrently.
        Pages whose download fails are returned without a content field.
        Without it every page gets an empty content string.
        """
        outcome = self._execute('/wikis/basic/api/wiki/%s/feed?%s' % (handle, build_query(options)))

        if download_content:
            self.content.apply_outcomes(self.content.resolve_all(handle, outcome.items))
        else:
            for item in outcome.items:
                item['content'] = ''

        logger.debug('wiki %s has %d page%s' % (handle, len(outcome.items), plural(len(outcome.items))))
        return outcome

    def wiki_page(self, handle, page, options=None):
        """
        One wiki page with its body downloaded.

        Raises:
            ContentFetchError: If the body cannot be downloaded
            TransportError: If the server cannot be reached
        """
        outcome = self._execute('/wikis/basic/api/wiki/%s/page/%s/entry?%s' % (handle, page, build_query(options)))
        if outcome.items:
            self.content.resolve(handle, outcome.items[0])
        return outcome

    def wiki_page_comments(self, handle, page, options=None):
        return self._execute('/wikis/basic/api/wiki/%s/page/%s/feed?%s' % (handle, page, build_query(options)))
