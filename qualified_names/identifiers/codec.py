"""Quote-aware splitting and joining of qualified identifiers."""

from typing import List, Optional
import logging

from .quote_style import QuoteStyle, resolve_quote_style

logger = logging.getLogger(__name__)

MAX_NAME_PARTS = 3


class IdentifierCodec:
    """Converts between qualified name strings and lists of unquoted parts.

    Parts are always ordered outermost to innermost: ``[catalog, schema, name]``
    with catalog and schema optional. Callers interested in schema and name
    read from the end of the list.
    """

    def __init__(self, provider=None, quote_style: Optional[QuoteStyle] = None):
        """Initialize codec.

        Args:
            provider: Connection supplying reported quote literals. May be
                None when ``quote_style`` is given.
            quote_style: Fixed quote style; skips resolution against the provider
        """
        if provider is None and quote_style is None:
            raise ValueError("IdentifierCodec needs a provider or a quote style")
        self.provider = provider
        self._quote_style = quote_style

    @property
    def quote_style(self) -> QuoteStyle:
        """Quote style, resolved from the provider on first use."""
        if self._quote_style is None:
            self._quote_style = resolve_quote_style(self.provider)
        return self._quote_style

    def override_quote_style(self, quote_style: QuoteStyle) -> None:
        """Replace the cached quote style."""
        self._quote_style = quote_style

    def split(self, name: str) -> Optional[List[str]]:
        """Split a possibly qualified name into unquoted parts.

        Args:
            name: Name such as ``table``, ``schema.table`` or
                ``[catalog].[schema].[table]``

        Returns:
            List of 1-3 unquoted parts, or None when the name does not conform
            and should be used literally
        """
        style = self.quote_style
        parts: List[str] = []
        here = 0
        end = len(name)
        first_delimiter = None

        while here < end:
            next_pos = self._find_identifier_end(name, here, style)
            identifier = name[here:next_pos]
            if not identifier:
                return None

            if identifier.startswith(style.prefix):
                identifier = self.unquote_identifier(identifier)
                if not identifier:
                    return None

            parts.append(identifier)

            if next_pos == end:
                if len(parts) == 2 and first_delimiter != style.schema_separator:
                    return None
                return parts

            delimiter = name[next_pos]
            if len(parts) == 1:
                first_delimiter = delimiter
                if delimiter not in style.separators:
                    return None
            elif len(parts) == 2:
                # Three parts: catalog separator first, then schema separator
                if (
                    first_delimiter != style.catalog_separator
                    or delimiter != style.schema_separator
                ):
                    return None
            else:
                return None

            here = next_pos + 1

        # Trailing delimiter or empty input
        return None

    def join(self, parts: List[str], force_quote: bool = False) -> str:
        """Join unquoted parts into a qualified name.

        Args:
            parts: 1-3 unquoted parts, outermost first
            force_quote: Quote every part. Otherwise only parts containing a
                separator are quoted, which is enough to split the result again.

        Returns:
            Qualified name
        """
        count = len(parts)
        if count < 1 or count > MAX_NAME_PARTS:
            raise ValueError(f"Expected 1 to {MAX_NAME_PARTS} name parts, got {count}")
        for part in parts:
            if not part:
                raise ValueError(f"Name parts must be non-empty, got {parts!r}")

        style = self.quote_style
        pieces: List[str] = []
        index = 0
        if count > 2:
            pieces.append(self._maybe_quote(parts[index], force_quote))
            pieces.append(style.catalog_separator)
            index += 1
        if count > 1:
            pieces.append(self._maybe_quote(parts[index], force_quote))
            pieces.append(style.schema_separator)
            index += 1
        pieces.append(self._maybe_quote(parts[index], force_quote))
        return "".join(pieces)

    def prepare_for_query(self, name: str) -> str:
        """Fully quote a name when it is understood, else return it verbatim."""
        parts = self.split(name)
        if parts:
            return self.join(parts, force_quote=True)
        logger.debug(f"Using name {name!r} literally, it could not be split")
        return name

    def quote_identifier(self, identifier: str) -> str:
        """Quote a single identifier with the active quote style.

        The style is the one split() scans with, so quoted output always splits
        back, also after override_quote_style().
        """
        return self.quote_style.quote(identifier)

    def unquote_identifier(self, identifier: str) -> str:
        """Remove enclosing quotes and collapse doubled suffix characters.

        A missing closing quote is tolerated; the remainder after the prefix is
        taken as the identifier.
        """
        style = self.quote_style
        body = identifier
        if body.startswith(style.prefix):
            body = body[len(style.prefix):]
        if body.endswith(style.suffix):
            body = body[: -len(style.suffix)]
        return body.replace(style.suffix + style.suffix, style.suffix)

    def _maybe_quote(self, identifier: str, force: bool) -> str:
        if force or self._find_separator(identifier, 0, self.quote_style) != -1:
            return self.quote_identifier(identifier)
        return identifier

    def _find_separator(self, text: str, start: int, style: QuoteStyle) -> int:
        """Position of the first catalog or schema separator, or -1."""
        position = start
        while position < len(text):
            if text[position] in style.separators:
                return position
            position += 1
        return -1

    def _find_identifier_end(self, text: str, start: int, style: QuoteStyle) -> int:
        """Position just past the identifier starting at ``start``.

        May be ``len(text)``.
        """
        end = len(text)
        if text[start] != style.prefix:
            position = self._find_separator(text, start, style)
            return end if position == -1 else position

        here = start + 1
        while here < end:
            here = text.find(style.suffix, here)
            if here == -1:
                # Unmatched opening quote: the rest of the string is the identifier
                break
            here += 1
            if here == end or text[here] != style.suffix:
                return here
            # Doubled suffix is an escaped literal
            here += 1
        return end
