"""Call-trace parsing and rendering.

The extractor reports a call trace as bracketed, comma-separated text
(``"[siteA, siteB]"``).  It is parsed once at the extraction boundary into an
ordered tuple of call-site identifiers; rendering back to the one-site-per-line
report form is a display concern.
"""

import re
from typing import Iterable, Tuple

_WHITESPACE = re.compile(r"\s+")


def parse_call_trace(raw: str) -> Tuple[str, ...]:
    """Split raw trace text into call-site identifiers, in original order.

    All bracket characters and all whitespace are removed before splitting on
    commas.  Empty or bracket-only text yields an empty tuple.  Tokens are not
    deduplicated or validated, so ``"[a,,b]"`` keeps its empty middle token.
    """
    compact = _WHITESPACE.sub("", raw.replace("[", "").replace("]", ""))
    if not compact:
        return ()
    return tuple(compact.split(","))


def render_call_flow(call_sites: Iterable[str]) -> str:
    """Render call sites one per line, each followed by a newline."""
    return "".join(f"{site}\n" for site in call_sites)


def normalize_call_flow(raw: str) -> str:
    """Normalize raw trace text straight to its report form.

    >>> normalize_call_flow("[alpha, beta,  gamma]")
    'alpha\\nbeta\\ngamma\\n'

    Not idempotent: rendered output contains no commas, so feeding it back in
    collapses every line into one token.  Re-frame it as ``[a,b,...]`` first.
    """
    return render_call_flow(parse_call_trace(raw))
