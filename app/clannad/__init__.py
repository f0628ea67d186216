"""clannad - symlink-aware archive manifests.

Scans filesystem subtrees into ordered manifests under a chosen
symlink policy and writes them into zip archives.
"""

__version__ = "0.1.0"
