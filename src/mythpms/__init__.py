"""mythpms - MythTV post-recording processing for Plex Media Server.

Removes commercials, transcodes recordings to H.264, keeps the MythTV
catalog pointing at the surviving file, and maintains a Plex-named tree
of symbolic links to the recordings.
"""

__version__ = "0.1.0"
