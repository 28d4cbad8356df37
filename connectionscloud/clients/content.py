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
Wiki page content download.

Wiki feeds do not embed page bodies. The body of each page version sits
behind a media URL that redirects to the actual download, so it is fetched
in a second, unformatted request per page.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from connectionscloud import logger
from connectionscloud.clients.http_wrapper import HTTPClientError
from connectionscloud.formatter import makeUnicode, plural

MEDIA_PATH = '/wikis/basic/api/wiki/%s/page/%s/version/%s/media'
DEFAULT_WORKERS = 8


class ContentFetchError(HTTPClientError):
    """The content of a wiki page could not be downloaded."""
    pass


class PartialBatchError(HTTPClientError):
    """One page of a batch download failed. Recorded, never raised."""

    def __init__(self, item_id, cause):
        super().__init__('Failed to get content for %s: %s' % (item_id, str(cause)),
                         getattr(cause, 'status_code', None), cause=cause)
        self.item_id = item_id


@dataclass
class ContentOutcome:
    """Settled download of one page."""
    item: Dict[str, Any]
    content: Optional[str] = None
    error: Optional[PartialBatchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ContentResolver:
    """Downloads wiki page bodies through a RequestExecutor."""

    def __init__(self, executor, max_workers=DEFAULT_WORKERS):
        self.executor = executor
        self.max_workers = max_workers

    @staticmethod
    def content_path(handle, item):
        return MEDIA_PATH % (handle, item.get('id'), item.get('version'))

    def fetch_content(self, handle, item):
        """
        Download the body of one page version.

        Raises:
            ContentFetchError: If the page is not accessible
            TransportError: If the server cannot be reached
        """
        path = self.content_path(handle, item)
        logger.debug('downloading wiki html from %s' % path)

        # media is html, not ATOM, so skip the formatter
        outcome = self.executor.execute(path, formatted=False)
        if not outcome.accessible:
            raise ContentFetchError('Content for %s is not available: %s %s' % (
                item.get('id'), outcome.status, outcome.error), outcome.status)

        html = makeUnicode(outcome.raw)
        logger.debug('downloaded HTML of size %d' % len(html))
        return html

    def resolve(self, handle, item):
        """Replace item['content'] with the downloaded body. Errors propagate."""
        item['content'] = self.fetch_content(handle, item)
        return item

    def resolve_all(self, handle, items):
        """
        Download the bodies of all items concurrently.

        Returns only once every download has settled. Failures are logged and
        reported in the matching ContentOutcome, never raised.

        Returns:
            List of ContentOutcome in the order of items
        """
        items = list(items)
        if not items:
            return []

        workers = max(1, min(self.max_workers, len(items)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='WIKICONTENT') as pool:
            futures = [pool.submit(self.fetch_content, handle, item) for item in items]

        outcomes = []
        for item, future in zip(items, futures):
            try:
                outcomes.append(ContentOutcome(item, content=future.result()))
            except Exception as e:
                failure = PartialBatchError(item.get('id'), e)
                logger.error(str(failure))
                outcomes.append(ContentOutcome(item, error=failure))

        failed = len([o for o in outcomes if not o.ok])
        logger.debug('downloaded %d of %d page%s' % (len(outcomes) - failed, len(outcomes), plural(len(outcomes))))
        return outcomes

    @staticmethod
    def apply_outcomes(outcomes):
        """
        Store downloaded bodies in their items.

        Items whose download failed lose their content field.
        """
        for outcome in outcomes:
            if outcome.ok:
                outcome.item['content'] = outcome.content
            else:
                outcome.item.pop('content', None)
        return [outcome.item for outcome in outcomes]
