"""
Error taxonomy shared by the data access layer, use cases and the HTTP layer.

StoreError      - any backend call failure (connectivity, constraint violation)
NotFoundError   - a referenced entity is absent when expected
ValidationError - empty or malformed user input; nothing is submitted
"""


class BreadcrumbError(Exception):
    pass


class StoreError(BreadcrumbError):
    pass


class NotFoundError(BreadcrumbError):
    pass


class ValidationError(BreadcrumbError, ValueError):
    pass
