"""Module contains loggers for different parts of the app"""

from linkedin_feed.src.infrastructure.loggers.base import RichLogger

feed_logger = RichLogger('LinkedIn_Feed')
