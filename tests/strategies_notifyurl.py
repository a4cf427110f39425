# topmark:header:start
#
#   project      : NotifyURL
#   file         : strategies_notifyurl.py
#   file_relpath : tests/strategies_notifyurl.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies producing NotifyURL configuration records.

Generated values stay inside the codec's lossless domain: list items never
contain their separator, map keys avoid the reserved ``,``/``:`` characters and
variable-length lists are never a single empty item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import strategies as st

from tests.sample_configs import Badge, Level, SampleConfig

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

# Any text that survives UTF-8 percent-encoding (lone surrogates do not).
s_text: SearchStrategy[str] = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    max_size=20,
)


def s_text_without(chars: str, *, min_size: int = 0) -> SearchStrategy[str]:
    """Text that contains none of ``chars``."""
    return st.text(
        alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters=chars),
        min_size=min_size,
        max_size=20,
    )


s_hostname: SearchStrategy[str] = st.from_regex(
    r"[a-z0-9]([a-z0-9-]{0,10}[a-z0-9])?(\.[a-z]{2,6})?", fullmatch=True
)

s_uint16: SearchStrategy[int] = st.integers(0, (1 << 16) - 1)


@st.composite
def s_badge(draw: DrawFn) -> Badge:
    label: str = draw(s_text_without("/"))
    if not label:
        return Badge()
    return Badge(label=label, count=draw(st.integers(min_value=0, max_value=10_000)))


@st.composite
def s_sample_config(draw: DrawFn) -> SampleConfig:
    """Records of `SampleConfig` with every codec-visible field drawn."""
    return SampleConfig(
        user=draw(s_text),
        secret=draw(s_text),
        host=draw(s_hostname),
        port=draw(s_uint16),
        channel=draw(s_text.filter(bool)),
        thread=draw(s_text),
        title=draw(s_text),
        retries=draw(st.integers(0, 255)),
        offset=draw(st.integers(-128, 127)),
        enabled=draw(st.booleans()),
        level=draw(st.sampled_from(list(Level))),
        tags=draw(st.lists(s_text_without(",", min_size=1), max_size=4)),
        limits=draw(st.dictionaries(s_text_without(",:", min_size=1), s_uint16, max_size=4)),
        badge=draw(s_badge()),
    )
