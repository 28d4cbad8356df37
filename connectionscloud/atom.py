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
ATOM feed conversion for Connections Cloud responses.

Turns an ATOM feed or a single ATOM entry document into a dictionary holding
one plain dict per entry under a caller-chosen key.
"""

from xml.etree import ElementTree

from connectionscloud.clients.http_wrapper import HTTPClientError
from connectionscloud.formatter import makeUnicode

NAMESPACES = {
    'atom': 'http://www.w3.org/2005/Atom',
    'app': 'http://www.w3.org/2007/app',
    'snx': 'http://www.ibm.com/xmlns/prod/sn',
    'td': 'urn:ibm.com/td',
    'thr': 'http://purl.org/syndication/thread/1.0',
    'opensearch': 'http://a9.com/-/spec/opensearch/1.1/',
}

FEED_TAG = '{%s}feed' % NAMESPACES['atom']
ENTRY_TAG = '{%s}entry' % NAMESPACES['atom']


class FormatError(HTTPClientError):
    """The response body is not an ATOM feed or entry."""
    pass


class AtomFormatter:
    """Default converter from ATOM to lists of dicts."""

    def format(self, content, key='items'):
        """
        Convert an ATOM document.

        Args:
            content: Response body, bytes or str
            key: Name of the collection in the returned dict

        Returns:
            Dict with the entries under key and the feed title and total
            result count where the feed carries them

        Raises:
            FormatError: If the body is empty or not ATOM
        """
        if not content:
            raise FormatError('Empty response, expected an ATOM document')

        if isinstance(content, str):
            content = content.encode('utf-8')

        try:
            root = ElementTree.fromstring(content)
        except ElementTree.ParseError as e:
            raise FormatError('Unable to parse ATOM: %s' % str(e), response_body=makeUnicode(content), cause=e)

        if root.tag == FEED_TAG:
            entries = root.findall('atom:entry', NAMESPACES)
        elif root.tag == ENTRY_TAG:
            entries = [root]
        else:
            raise FormatError('Unexpected document element %s' % root.tag, response_body=makeUnicode(content))

        result = {key: [self.entry(e) for e in entries]}

        if root.tag == FEED_TAG:
            result['title'] = _text(root, 'atom:title')
            total = root.findtext('opensearch:totalResults', None, NAMESPACES)
            if total is not None and total.strip().isdigit():
                result['total'] = int(total)

        return result

    def entry(self, element):
        """Convert one atom:entry element."""
        content = element.find('atom:content', NAMESPACES)

        record = {
            'id': self.entry_id(element),
            'title': _text(element, 'atom:title'),
            'summary': _text(element, 'atom:summary'),
            'content': (content.text or '').strip() if content is not None else '',
            'published': _text(element, 'atom:published'),
            'updated': _text(element, 'atom:updated'),
            'author': self.person(element.find('atom:author', NAMESPACES)),
            'category': [c.get('term') for c in element.findall('atom:category', NAMESPACES) if c.get('term')],
            'links': self.links(element),
        }

        if content is not None:
            record['contentType'] = content.get('type', '')
            if content.get('src'):
                record['contentSrc'] = content.get('src')

        version = _text(element, 'td:versionUuid')
        if version:
            record['version'] = version
        label = _text(element, 'td:label')
        if label:
            record['label'] = label

        return record

    @staticmethod
    def entry_id(element):
        """
        The identifier other API calls expect for this entry.

        Wiki pages carry it in td:uuid and profiles in the contributor's
        snx:userid. Everything else uses the last segment of atom:id.
        """
        uuid = _text(element, 'td:uuid')
        if uuid:
            return uuid
        userid = _text(element, 'atom:contributor/snx:userid')
        if userid:
            return userid
        atom_id = _text(element, 'atom:id')
        return atom_id.rsplit(':', 1)[-1]

    @staticmethod
    def person(element):
        if element is None:
            return {}
        return {
            'name': _text(element, 'atom:name'),
            'email': _text(element, 'atom:email'),
            'userid': _text(element, 'snx:userid'),
        }

    @staticmethod
    def links(element):
        links = {}
        for link in element.findall('atom:link', NAMESPACES):
            href = link.get('href')
            if href:
                links.setdefault(link.get('rel', 'alternate'), href)
        return links


def _text(element, path):
    return (element.findtext(path, '', NAMESPACES) or '').strip()
