"""
Accept-Encoding negotiation.

Implements the HTTP/1.1 content-coding selection rules: q-values,
the ``*`` wildcard, and the implicit acceptability of ``identity``.
"""
import re
from typing import List, NamedTuple, Optional, Sequence

_ENCODING_RE = re.compile(r'^\s*([^\s;]+)\s*(?:;(.*))?$')


class EncodingSpec(NamedTuple):
    """One entry of an Accept-Encoding header."""
    encoding: str
    q: float
    index: int


class _Priority(NamedTuple):
    encoding: str
    q: float
    specificity: int
    order: int
    index: int


def _parse_quality(params: Optional[str]) -> float:
    q = 1.0
    if not params:
        return q

    for param in params.split(';'):
        key, _, value = param.strip().partition('=')
        if key.strip().lower() == 'q':
            try:
                q = float(value.strip())
            except ValueError:
                q = 1.0
            break
    return q


def parse_accept_encoding(header: Optional[str]) -> List[EncodingSpec]:
    """
    Parse an Accept-Encoding header into its entries.

    ``identity`` is acceptable unless explicitly listed. When it is not
    listed, it is appended with the lowest quality seen in the header.
    """
    specs: List[EncodingSpec] = []
    has_identity = False
    min_quality = 1.0

    for part in (header or '').split(','):
        match = _ENCODING_RE.match(part)
        if not match:
            continue

        encoding = match.group(1)
        q = _parse_quality(match.group(2))
        spec = EncodingSpec(encoding, q, len(specs))

        if _specificity('identity', spec) is not None:
            has_identity = True
        min_quality = min(min_quality, q or 1.0)

        specs.append(spec)

    if not has_identity:
        specs.append(EncodingSpec('identity', min_quality, len(specs)))

    return specs


def _specificity(encoding: str, spec: EncodingSpec) -> Optional[int]:
    if spec.encoding.lower() == encoding.lower():
        return 1
    if spec.encoding == '*':
        return 0
    return None


def _priority(encoding: str, specs: List[EncodingSpec], index: int) -> _Priority:
    best = _Priority(encoding, 0.0, -1, -1, index)

    for spec in specs:
        s = _specificity(encoding, spec)
        if s is None:
            continue
        if (s, spec.q, spec.index) > (best.specificity, best.q, best.order):
            best = _Priority(encoding, spec.q, s, spec.index, index)

    return best


class AcceptEncoding:
    """The parsed Accept-Encoding preferences of a request."""

    def __init__(self, header: Optional[str]):
        self.header = header
        self.specs = parse_accept_encoding(header)

    def preferred(self, available: Sequence[str]) -> List[str]:
        """Acceptable encodings from ``available``, most preferred first."""
        priorities = [
            _priority(encoding, self.specs, i)
            for i, encoding in enumerate(available)
        ]
        accepted = [p for p in priorities if p.q > 0]
        accepted.sort(key=lambda p: (-p.q, -p.specificity, p.order, p.index))
        return [p.encoding for p in accepted]

    def best(self, available: Sequence[str]) -> Optional[str]:
        """The most preferred acceptable encoding, or None."""
        preferred = self.preferred(available)
        return preferred[0] if preferred else None

    def accepts(self, encoding: str) -> bool:
        return self.best([encoding]) is not None


def negotiate_encoding(header: Optional[str], available: Sequence[str]) -> Optional[str]:
    """Select the encoding from ``available`` the header prefers most."""
    return AcceptEncoding(header).best(available)
