"""Text validation, the capitalize/reverse/trim pipeline and JSON record encoding."""
import logging
from threading import Lock
import time
from typing import Callable, Optional
import unicodedata

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_data_server.common.logger import logger as package_logger
from arithmetic_data_server.common.operations import TextRecord


EMPTY_JSON = "{}"

# Characters removed from both ends of processed text: U+0000 to U+0020
TRIM_CHARS = "".join(map(chr, range(0x21)))

# Control characters that count as whitespace for input validation
WHITESPACE_CONTROLS = frozenset("\t\n\u000b\f\r\u001c\u001d\u001e\u001f")

# Space separators that do not count as whitespace
NON_BREAKING_SPACES = frozenset("\u00a0\u2007\u202f")

_clock_lock = Lock()
_last_millis = 0


def current_millis() -> int:
    """
    Return wall-clock time in milliseconds since epoch, never lower than a previous call.

    :return: Epoch milliseconds
    :rtype: int
    """
    global _last_millis
    now = time.time_ns() // 1_000_000
    with _clock_lock:
        # Wall clock may step backwards; timestamps handed out must not
        _last_millis = max(_last_millis, now)
        return _last_millis


def is_whitespace(char: str) -> bool:
    """
    Tell whether a single character counts as whitespace for input validation.

    Space, line and paragraph separators count, except the non-breaking
    spaces (U+00A0, U+2007, U+202F). Tab, line feed, vertical tab, form
    feed, carriage return and U+001C to U+001F count too.

    :param str char: A single character

    :return: True if the character is whitespace
    :rtype: bool
    """
    if char in WHITESPACE_CONTROLS:
        return True
    return unicodedata.category(char) in ("Zs", "Zl", "Zp") and char not in NON_BREAKING_SPACES


def capitalize_first(char: str) -> str:
    """
    Title-case a single character, keeping it as is when its title case spans several characters.

    "a" -> "A" and U+01C6 (dz) -> U+01C5 (Dz), but U+00DF (sharp s) is kept rather than becoming "Ss".
    """
    titled = char.title()
    return titled if len(titled) == 1 else char


class DataService(BaseModel):
    """
    Validates and transforms free text, and encodes name/value records as JSON.

    Instances hold no per-request state and are safe to share between requests.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    logger: logging.Logger = Field(default=package_logger, description="Diagnostic sink")
    clock: Callable[[], int] = Field(default=current_millis, description="Epoch-milliseconds source")

    def is_valid_input(self, text: Optional[str]) -> bool:
        """Return True when ``text`` has at least one non-whitespace character (see ``is_whitespace``)."""
        return text is not None and not all(is_whitespace(char) for char in text)

    def process_text(self, text: Optional[str]) -> str:
        """
        Capitalize, then reverse, then trim ``text``.

        The order is fixed: the capitalized first character ends up at the
        tail of the result ("hello world" -> "dlrow olleH").

        :param Optional[str] text: Input text, may be None

        :return: Processed text, or an empty string for None/empty input
        :rtype: str
        """
        if not text:
            return ""

        capitalized = capitalize_first(text[0]) + text[1:]
        reversed_text = capitalized[::-1]
        # Only ASCII control characters and space are trimmed, not all Unicode whitespace
        return reversed_text.strip(TRIM_CHARS)

    def create_record(self, name: str, value: int) -> TextRecord:
        return TextRecord(name=name, value=value, timestamp=self.clock())

    def create_json_data(self, name: str, value: int) -> str:
        """
        Build a record for ``name``/``value`` and serialize it to compact JSON.

        Serialization errors are logged and yield ``"{}"`` instead of raising.

        :param str name: Record name
        :param int value: Record value

        :return: ``{"name":...,"value":...,"timestamp":...}`` or ``"{}"``
        :rtype: str
        """
        try:
            return self.create_record(name, value).model_dump_json()
        except Exception as exc:
            self.logger.error(f"🧾❌ Error creating JSON for {name!r}: {exc}", exc_info=True)
            return EMPTY_JSON
