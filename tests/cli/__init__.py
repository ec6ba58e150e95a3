# topmark:header:start
#
#   project      : Whisker
#   file         : __init__.py
#   file_relpath : tests/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Tests for `whisker.cli`."""
