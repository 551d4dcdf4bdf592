"""Development settings for the house rental project.

This module extends the base settings with development specific
configuration, such as enabling debug and allowing all hosts.
Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
LOGGING['handlers']['console']['level'] = LOG_LEVEL
LOGGING['loggers']['apps']['level'] = LOG_LEVEL
LOGGING['loggers']['shared']['level'] = LOG_LEVEL
