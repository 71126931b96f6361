"""
Static lookup data for the abbreviation resolver and the relevance scorer.

Both tables are read-only mappings. Components take them as constructor
arguments (defaulting to these) so tests can inject their own.
"""

from types import MappingProxyType
from typing import Mapping

# ══════════════════════════════════════════════════════════════════════════════
#  COMMON ABBREVIATIONS: abbreviation -> expansion (keys lower-case)
# ══════════════════════════════════════════════════════════════════════════════
COMMON_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    # Keys
    "ctrl": "control",
    "alt": "alternate",
    "del": "delete",
    "ins": "insert",
    "pg": "page",
    "num": "numeric",
    "caps": "capslock",
    "tab": "tabulate",
    "esc": "escape",
    # Actions
    "cp": "copy",
    "mv": "move",
    "rm": "remove",
    "sv": "save",
    "op": "open",
    "cl": "close",
    "pr": "print",
    "fd": "find",
    "rp": "replace",
    "sl": "select",
    "undo": "undo",
    "redo": "redo",
    # Applications
    "vs": "visual studio",
    "vsc": "visual studio code",
    "chrome": "google chrome",
    "ff": "firefox",
    "edge": "microsoft edge",
    "ps": "photoshop",
    "ai": "illustrator",
    "xl": "excel",
    "wd": "word",
    "pp": "powerpoint",
    "ot": "outlook",
    "tm": "teams",
    "sk": "skype",
    # Directions
    "l": "left",
    "r": "right",
    "u": "up",
    "d": "down",
    "beg": "beginning",
    "end": "end",
    # Tech terms
    "db": "database",
    "api": "application programming interface",
    "ui": "user interface",
    "ux": "user experience",
    "css": "cascading style sheets",
    "js": "javascript",
    "ts": "typescript",
    "sql": "structured query language",
    "html": "hypertext markup language",
    "xml": "extensible markup language",
    "json": "javascript object notation",
    "http": "hypertext transfer protocol",
    "https": "hypertext transfer protocol secure",
    "ftp": "file transfer protocol",
    "ssh": "secure shell",
    "ssl": "secure sockets layer",
    "tls": "transport layer security",
    "tcp": "transmission control protocol",
    "udp": "user datagram protocol",
    "ip": "internet protocol",
    "dns": "domain name system",
    "url": "uniform resource locator",
    "uri": "uniform resource identifier",
    "gpu": "graphics processing unit",
    "cpu": "central processing unit",
    "ram": "random access memory",
    "ssd": "solid state drive",
    "hdd": "hard disk drive",
    "usb": "universal serial bus",
    "wifi": "wireless fidelity",
    "lan": "local area network",
    "wan": "wide area network",
    "vpn": "virtual private network",
})

# ══════════════════════════════════════════════════════════════════════════════
#  POPULAR APPS: source name (lower-case) -> popularity 0..100
# ══════════════════════════════════════════════════════════════════════════════
POPULAR_APPS: Mapping[str, int] = MappingProxyType({
    # Browsers
    "chrome": 100, "firefox": 95, "edge": 90, "safari": 85,
    # Editors
    "vscode": 100, "visual studio": 95, "sublime": 85, "atom": 80,
    # Office
    "word": 95, "excel": 95, "powerpoint": 90, "outlook": 90,
    # Creative
    "photoshop": 90, "illustrator": 85, "premiere": 80, "after effects": 75,
    # System
    "windows": 100, "explorer": 95, "notepad": 85, "calculator": 80,
    # Communication
    "teams": 90, "slack": 85, "discord": 80, "zoom": 85,
    # Media
    "spotify": 85, "vlc": 80, "media player": 75,
})
