# topmark:header:start
#
#   project      : NotifyURL
#   file         : __init__.py
#   file_relpath : src/notifyurl/schema/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declarative configuration schemas.

Configuration records are dataclasses whose fields are declared with the
constructors in ``fields``. The ``extractor`` turns such a type into an ordered
tuple of immutable ``FieldDescriptor`` objects, validated once per type.
"""

from __future__ import annotations
