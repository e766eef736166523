from domain_age.checkers.dates import (
    UnsupportedDateFormat,
    format_date,
    is_recently_registered,
    normalize_date,
)
from domain_age.checkers.whois_checker import (
    CreationDateFormatError,
    DomainCheckError,
    MissingCreationDate,
    WHOISChecker,
    WhoisFetchError,
    WhoisParseError,
)

__all__ = [
    "CreationDateFormatError",
    "DomainCheckError",
    "MissingCreationDate",
    "UnsupportedDateFormat",
    "WHOISChecker",
    "WhoisFetchError",
    "WhoisParseError",
    "format_date",
    "is_recently_registered",
    "normalize_date",
]
