"""Terminal escape removal for captured output."""

import re

# CSI: ESC [ params intermediates final  (colours, cursor movement)
_CSI = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
# OSC: ESC ] ... BEL | ESC \  (titles, hyperlinks)
_OSC = re.compile(r"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")
# Remaining two-character escapes (ESC =, ESC >, ESC (B ...)
_ESC_OTHER = re.compile(r"\x1b[()][A-Za-z0-9]|\x1b[@-Z\\-_=>]")
# Man-page overstrike: bold "X\bX" and underline "_\bX"
_OVERSTRIKE = re.compile(r".\x08")


def strip_ansi(text: str) -> str:
    """Remove escape sequences and overstrike, and normalise line endings."""
    if not text:
        return ""
    text = _OSC.sub("", text)
    text = _CSI.sub("", text)
    text = _ESC_OTHER.sub("", text)
    text = _OVERSTRIKE.sub("", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.replace("\x1b", "")
