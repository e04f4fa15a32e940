"""Routing — the dispatch decision for every request.

Maps a method + path to a redirect, a logical page, a literal file
lookup, or a 404, and translates collaborator failures into statuses.
"""

from pagestream.routing.router import Router

__all__ = ["Router"]
