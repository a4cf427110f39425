# topmark:header:start
#
#   project      : NotifyURL
#   file         : __init__.py
#   file_relpath : src/notifyurl/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runtime configuration of the NotifyURL library (logging)."""

from __future__ import annotations
