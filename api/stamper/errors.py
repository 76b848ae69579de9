class StamperError(Exception):
    """Base class for failures that abort a signing request."""


class DegenerateGeometryError(StamperError):
    pass


class EmptyImageError(DegenerateGeometryError):
    pass


class InvalidImageDataError(StamperError):
    pass


class TemplateUnavailableError(StamperError):
    pass


class IntegrityComputationError(StamperError):
    pass


class InvalidFieldError(StamperError):
    pass
