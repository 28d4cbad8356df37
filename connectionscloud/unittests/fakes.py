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

"""Canned ATOM documents and HTTP stand-ins shared by the tests."""

import threading
from unittest.mock import Mock

from requests.cookies import RequestsCookieJar

SERVER = 'apps.example.com'
USERNAME = 'jane@example.com'
PASSWORD = 'pa55word!'

WIKI_HANDLE = 'b3fc070c-ff0c-405d-9dd9-f2e545594c61'


def wiki_entry_xml(uuid, version, title):
    return '''
  <entry>
    <id>urn:lsid:ibm.com:td:%(uuid)s</id>
    <td:uuid>%(uuid)s</td:uuid>
    <td:label>%(title)s</td:label>
    <td:versionUuid>%(version)s</td:versionUuid>
    <title type="text">%(title)s</title>
    <published>2017-03-01T10:00:00.000Z</published>
    <updated>2017-03-02T10:00:00.000Z</updated>
    <author>
      <name>Jane Doe</name>
      <snx:userid>11111111-2222-3333-4444-555555555555</snx:userid>
    </author>
    <category term="wiki" scheme="tag:ibm.com,2006:td/type"/>
    <link rel="self" href="https://apps.example.com/wikis/basic/api/wiki/w/page/%(uuid)s/entry"/>
    <content type="text/html" src="/wikis/basic/api/wiki/w/page/%(uuid)s/media?convertTo=html"/>
  </entry>''' % {'uuid': uuid, 'version': version, 'title': title}


def wiki_feed_xml(pages):
    entries = ''.join(wiki_entry_xml(*page) for page in pages)
    return ('<?xml version="1.0" encoding="UTF-8"?>'
            '<feed xmlns="http://www.w3.org/2005/Atom" xmlns:td="urn:ibm.com/td" '
            'xmlns:snx="http://www.ibm.com/xmlns/prod/sn" '
            'xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">'
            '<title type="text">Wiki pages</title>'
            '<opensearch:totalResults>%d</opensearch:totalResults>%s</feed>' % (len(pages), entries)).encode('utf-8')


def wiki_page_xml(uuid, version, title):
    entry = wiki_entry_xml(uuid, version, title).replace(
        '<entry>', '<entry xmlns="http://www.w3.org/2005/Atom" xmlns:td="urn:ibm.com/td" '
                   'xmlns:snx="http://www.ibm.com/xmlns/prod/sn">', 1)
    return ('<?xml version="1.0" encoding="UTF-8"?>' + entry).encode('utf-8')


PROFILE_FEED = b'''<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:snx="http://www.ibm.com/xmlns/prod/sn">
  <title type="text">Jane Doe</title>
  <entry>
    <id>tag:profiles.ibm.com,2006:entry7a4f5c2e-0e2a-4b8e-9d62-1f2e3d4c5b6a</id>
    <title type="text">Jane Doe</title>
    <updated>2017-03-02T10:00:00.000Z</updated>
    <contributor>
      <name>Jane Doe</name>
      <snx:userid>7a4f5c2e-0e2a-4b8e-9d62-1f2e3d4c5b6a</snx:userid>
      <email>jane@example.com</email>
    </contributor>
    <content type="xhtml"><div xmlns="http://www.w3.org/1999/xhtml"/></content>
  </entry>
</feed>'''

TAGS_FEED = b'''<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="text">Tags</title>
  <entry>
    <id>urn:lsid:ibm.com:profiles:tag:python</id>
    <title type="text">python</title>
  </entry>
  <entry>
    <id>urn:lsid:ibm.com:profiles:tag:cloud</id>
    <title type="text">cloud</title>
  </entry>
</feed>'''

APPS_FEED = b'''<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="text">Remote applications</title>
  <entry>
    <id>urn:lsid:ibm.com:td:f3c1a6a0-0000-4d6e-8c41-9e1f2b3c4d5e</id>
    <title type="text">Wiki</title>
    <content type="text">Wiki</content>
  </entry>
  <entry>
    <id>urn:lsid:ibm.com:blogs:community-blog</id>
    <title type="text">Blog</title>
    <content type="text">Blog</content>
  </entry>
</feed>'''


def make_response(status_code=200, content=b'', reason='OK'):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.content = content
    response.text = content.decode('utf-8') if isinstance(content, bytes) else content
    return response


class FakeSession:
    """
    Stand-in for requests.Session that answers from a list of routes.

    Each route is a URL fragment and a response or exception. The first
    route whose fragment occurs in the requested URL answers, anything
    unmatched gets a 404.
    """

    def __init__(self):
        self.routes = []
        self.calls = []
        self.cookies = RequestsCookieJar()
        self.closed = False
        self._lock = threading.Lock()

    def route(self, fragment, response):
        self.routes.append((fragment, response))

    def request(self, method, url, **kwargs):
        with self._lock:
            self.calls.append((method, url, kwargs))
        for fragment, response in self.routes:
            if fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return make_response(404, b'', 'Not Found')

    def urls(self):
        return [call[1] for call in self.calls]

    def close(self):
        self.closed = True


