class StoutMapError(Exception):
    """Base class for errors raised while loading or rendering reviews."""


class NetworkError(StoutMapError):
    """The dataset resource could not be retrieved."""


class ParseError(StoutMapError):
    """The dataset payload is not a well-formed list of review records."""


class MissingContainer(StoutMapError):
    """A render target is absent from the page.

    Renderers treat this as a no-op and check ``has_container`` before writing.
    """
