# topmark:header:start
#
#   project      : NotifyURL
#   file         : __init__.py
#   file_relpath : src/notifyurl/codec/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Textual encoding of configuration records.

- ``values``: per-kind value encoders and decoders.
- ``query``: query-string serialization of fields.
- ``url``: the service URL assembler and disassembler.
"""

from __future__ import annotations
