"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the application runs in a local environment, False otherwise.

    test_mode_enabled() -> bool:
        True if deterministic test time is allowed (TEST_MODE=1).

Example:
    >>> from ephemeralpaste.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from ephemeralpaste.constants import ENV


def running_locally() -> bool:
    """Return True if APP_ENV is 'local' (the default), False otherwise."""
    return os.getenv(ENV.App.APP_ENV, 'local').lower() == 'local'


def test_mode_enabled() -> bool:
    return os.getenv(ENV.App.TEST_MODE) == '1'
