# topmark:header:start
#
#   project      : NotifyURL
#   file         : __init__.py
#   file_relpath : src/notifyurl/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core primitives shared across NotifyURL.

Included modules:

- ``errors``
  The exception taxonomy raised by the schema layer, the codec and services.

- ``enum_mixins``
  Typing-friendly Enum utilities (stable keys, tolerant parsing) used for
  field kinds and URL parts.
"""

from __future__ import annotations
