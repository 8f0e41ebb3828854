import os

# Label alphabet: home-row-ish letters first, then the same set upper-cased.
# Order matters: the first occurrence in a group gets LABELS[0], and so on.
LABELS: str = "eariotnslcudpmhgbfywkvxzjqEARIOTNSLCUDPMHGBFYWKVXZJQ"

# Two filler chars appended to every scanned line so the last real
# character still forms a two-character key.
LINE_PADDING: str = "  "

# "forward" or "backward"
DEFAULT_DIRECTION: str = "forward"

# /* ~~~ skip whole lines behind the cursor (above it when going forward,
#        below it when going backward) ~~~ */
RESTRICT_TO_DIRECTION: bool = False

# Rendering colours shared by the web UI and the desktop app
HIGHLIGHT_BACKGROUND: str = "#264f78"
LABEL_FOREGROUND: str = "#0b0f14"
LABEL_BACKGROUND: str = "#cfd8e3"

# Progress logging (set PAIRJUMP_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("PAIRJUMP_VERBOSE") == "1"
