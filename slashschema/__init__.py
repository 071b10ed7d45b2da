"""
Slash Command Schemas
~~~~~~~~~~~~~~~~~~~~~

Declarative slash command schemas and validation of invocation payloads.

:copyright: (c) 2015-present Rapptz
:license: MIT, see LICENSE for more details.

"""

__title__ = 'slashschema'
__author__ = 'Rapptz'
__license__ = 'MIT'
__copyright__ = 'Copyright 2015-present Rapptz'
__version__ = '1.0.0'

import logging
from typing import NamedTuple, Literal

from .enums import *
from .errors import *
from .models import *
from .schema import *
from .namespace import *
from .resolver import *
from .registry import *
from . import utils as utils


class VersionInfo(NamedTuple):
    major: int
    minor: int
    micro: int
    releaselevel: Literal['alpha', 'beta', 'candidate', 'final']
    serial: int


version_info: VersionInfo = VersionInfo(major=1, minor=0, micro=0, releaselevel='final', serial=0)

logging.getLogger(__name__).addHandler(logging.NullHandler())

del logging, NamedTuple, Literal, VersionInfo
