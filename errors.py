class PortfolioError(Exception):
    """Base error rendered as ``{"error": message}`` with ``status_code``."""

    status_code = 500


class CategoryNotFound(PortfolioError):
    status_code = 404

    def __init__(self, message: str = "Category not found"):
        super().__init__(message)


class DocumentValidationError(PortfolioError):
    # Field constraint failures are reported like store failures
    status_code = 500


class WriteError(PortfolioError):
    status_code = 500
