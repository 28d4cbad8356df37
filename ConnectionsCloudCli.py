#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
import json
import os
import sys
import threading

import connectionscloud
from connectionscloud import logger
from connectionscloud.cloud import ConnectionsCloud
from connectionscloud.clients.http_wrapper import HTTPClientError
from connectionscloud.config import ConfigLoader, ConfigError

USAGE = """%prog [options] command handle [page]

commands:
  apps HANDLE           applications of a community
  blog HANDLE           blog entries
  forum HANDLE          forum topics
  topic HANDLE          replies of a forum topic
  tags USERID           tags of a profile
  wiki HANDLE           wiki pages
  page HANDLE PAGE      one wiki page
  comments HANDLE PAGE  comments of a wiki page"""


def run_command(client, command, args, download_content=True):
    if command == 'page':
        if len(args) < 2:
            raise SystemExit('page needs a wiki handle and a page id')
        return client.wiki_page(args[0], args[1])
    if command == 'comments':
        if len(args) < 2:
            raise SystemExit('comments needs a wiki handle and a page id')
        return client.wiki_page_comments(args[0], args[1])

    handle = args[0]
    if command == 'apps':
        return client.community_apps(handle)
    if command == 'blog':
        return client.blog_entries(handle)
    if command == 'forum':
        return client.forum_topics(handle)
    if command == 'topic':
        return client.forum_topic(handle, include_replies=True)
    if command == 'tags':
        return client.profile_tags(handle)
    if command == 'wiki':
        return client.wiki_pages(handle, download_content=download_content)
    raise SystemExit('Unknown command: %s' % command)


def main():
    # rename this thread
    threading.current_thread().name = "MAIN"

    from optparse import OptionParser

    p = OptionParser(usage=USAGE)
    p.add_option('-q', '--quiet', action="store_true",
                 dest='quiet', help="Don't log to console")
    p.add_option('--debug', action="store_true",
                 dest='debug', help="Show debuglog messages")
    p.add_option('--config',
                 dest='config', default=None,
                 help="Path to config.ini file")
    p.add_option('--loglevel',
                 dest='loglevel', default=None,
                 help="Debug loglevel")
    p.add_option('--nocontent', action="store_true",
                 dest='nocontent', help="Don't download wiki page content")

    options, args = p.parse_args()

    if len(args) < 2:
        p.error('a command and a handle are required')

    config_file = options.config or os.path.join(os.getcwd(), 'config.ini')

    loader = ConfigLoader(config_file)
    try:
        config = loader.apply_environment(loader.load())
        config.validate()
    except ConfigError as e:
        raise SystemExit('Configuration error: %s' % str(e))

    # command line flags override the configured loglevel
    connectionscloud.LOGLEVEL = config.general.log_level
    if options.debug:
        connectionscloud.LOGLEVEL = 2

    if options.quiet:
        connectionscloud.LOGLEVEL = 0

    if options.loglevel:
        try:
            connectionscloud.LOGLEVEL = int(options.loglevel)
        except ValueError:
            p.error('loglevel must be a number')

    connectionscloud.CONFIG.update(config.logging_dict())
    logger.connectionscloud_log.initLogger(loglevel=connectionscloud.LOGLEVEL)

    command = args[0].lower()
    with ConnectionsCloud.from_config(config) as client:
        try:
            client.login()
            outcome = run_command(client, command, args[1:], download_content=not options.nocontent)
        except HTTPClientError as e:
            logger.error('%s failed: %s' % (command, str(e)))
            sys.exit(1)

    if not outcome.accessible:
        logger.warn('%s returned %s %s' % (command, outcome.status, outcome.error))

    print(json.dumps({'status': outcome.status, 'error': outcome.error, 'items': outcome.items}, indent=2))


if __name__ == "__main__":
    main()
