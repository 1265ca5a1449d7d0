"""Constants for buildcat."""

import re

# Upstream artifact hosting
DEFAULT_BASE_URL = "https://runtime.fivem.net/artifacts/fivem"

# Per-platform build directory and archive file names.
# Linux ships a single tarball, so both archive slots point at it.
PLATFORM_BUILD_DIRS = {
    "windows": "build_server_windows/master",
    "linux": "build_proot_linux/master",
}
PLATFORM_ARCHIVES = {
    "windows": ("server.zip", "server.7z"),
    "linux": ("fx.tar.xz", "fx.tar.xz"),
}

# Support policy defaults (days)
DEFAULT_ACTIVE_WINDOW_DAYS = 14  # two weeks after the next release
DEFAULT_DEPRECATION_WINDOW_DAYS = 42  # six weeks after the next release
MAX_WINDOW_DAYS = 36500  # upper bound for every policy window

# Version identifier segmentation: ASCII digit runs, any other character separates
NUMERIC_SEGMENT_RE = re.compile(r"[0-9]+")

# Query limits (mirrors the public artifacts API)
QUERY_DEFAULT_LIMIT = 10
QUERY_MAX_LIMIT = 20

CONFIG_FILENAME = "buildcat.toml"
