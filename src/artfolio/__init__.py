"""artfolio - build and publish an artist portfolio site.

Survey answers and edits live in a per-artist ContentState; the site
compiler merges them with medium placeholders into a CompiledSite
artifact that the renderer turns into page markup.
"""

__version__ = "0.1.0"
