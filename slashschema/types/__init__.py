"""
slashschema.types
~~~~~~~~~~~~~~~~~

Typings for the raw payloads accepted and produced by slashschema.

:copyright: (c) 2015-present Rapptz
:license: MIT, see LICENSE for more details.

"""
