"""Audio file collaborators: ID3 tag store and duration probing."""

from .source import AudioSource
from .tags import Mp3TagStore

__all__ = [
    "AudioSource",
    "Mp3TagStore",
]
