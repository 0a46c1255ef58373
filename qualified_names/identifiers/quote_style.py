"""Quoting characters and part separators used by a backend."""

from dataclasses import dataclass
from typing import Callable, Tuple
import logging

from ..errors import QuoteStyleError

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "."

# Quoted with the backend's own routine when it reports no quote literals
PROBE_IDENTIFIER = "abcdefgh"


@dataclass(frozen=True)
class QuoteStyle:
    """Active quote prefix/suffix and catalog/schema separators."""

    prefix: str
    suffix: str
    catalog_separator: str = DEFAULT_SEPARATOR
    schema_separator: str = DEFAULT_SEPARATOR

    def __post_init__(self):
        _require_single_char("quote prefix", self.prefix)
        _require_single_char("quote suffix", self.suffix)
        _require_single_char("catalog separator", self.catalog_separator)
        _require_single_char("schema separator", self.schema_separator)

    @property
    def separators(self) -> Tuple[str, str]:
        """Separator characters, schema first."""
        return (self.schema_separator, self.catalog_separator)

    def quote(self, identifier: str) -> str:
        """Wrap an identifier in prefix/suffix, doubling embedded suffixes."""
        escaped = identifier.replace(self.suffix, self.suffix + self.suffix)
        return f"{self.prefix}{escaped}{self.suffix}"


def _require_single_char(label: str, value: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise QuoteStyleError(f"{label} must be a single character, got {value!r}")


def probe_quote_literals(quote: Callable[[str], str]) -> Tuple[str, str]:
    """Derive quote prefix and suffix by quoting a synthetic identifier.

    Args:
        quote: The backend's native identifier quoting routine

    Returns:
        Tuple of (prefix, suffix)

    Raises:
        QuoteStyleError: If the quoted text does not contain the identifier
            exactly once or either side comes back empty
    """
    quoted = quote(PROBE_IDENTIFIER)
    parts = quoted.split(PROBE_IDENTIFIER)
    if len(parts) != 2:
        raise QuoteStyleError(
            f"Quoting {PROBE_IDENTIFIER!r} produced {quoted!r}; cannot derive quote literals"
        )

    prefix, suffix = parts
    if not prefix:
        raise QuoteStyleError("Probed quote prefix is empty")
    if not suffix:
        raise QuoteStyleError("Probed quote suffix is empty")
    return prefix, suffix


def resolve_quote_style(provider) -> QuoteStyle:
    """Build the quote style reported by a connection.

    Reported prefix/suffix are used when both are present; otherwise they are
    probed through ``provider.quote_identifier``. Empty separators fall back
    to ``"."``.

    Args:
        provider: Object exposing ``reported_quote_prefix``,
            ``reported_quote_suffix``, ``reported_catalog_separator``,
            ``reported_schema_separator`` and ``quote_identifier``

    Returns:
        Resolved quote style
    """
    prefix = provider.reported_quote_prefix
    suffix = provider.reported_quote_suffix
    if not prefix or not suffix:
        logger.debug("Backend reported no quote literals, probing quote routine")
        prefix, suffix = probe_quote_literals(provider.quote_identifier)

    catalog_separator = provider.reported_catalog_separator or DEFAULT_SEPARATOR
    schema_separator = provider.reported_schema_separator or DEFAULT_SEPARATOR

    style = QuoteStyle(
        prefix=prefix,
        suffix=suffix,
        catalog_separator=catalog_separator,
        schema_separator=schema_separator,
    )
    logger.debug(f"Resolved quote style {style}")
    return style
