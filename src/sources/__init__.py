"""Release sources for tzdata.

This module reads the latest tzdata version and fetches release archives
from the IANA servers or from a local directory of archives.
"""
