"""
Error taxonomy shared by the API layer and the services.

Oracle failures surface as a single user-visible message; contract violations are programming errors.
Input problems never get here: the request models reject them with a 422 before any model call.
"""


class OracleError(Exception):
    """Base class for failures talking to the hosted language model."""
    status_code = 502

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OracleUnavailable(OracleError):
    status_code = 502


class OracleRateLimited(OracleError):
    status_code = 429


class OracleQuotaExceeded(OracleError):
    status_code = 402


class OracleMalformedResponse(OracleError):
    status_code = 502


class ContractViolation(AssertionError):
    """A closed enumeration received a value outside its set."""


def check_exhaustive(table, enum, what: str) -> None:
    """Fail at import when a lookup table keyed by a closed enumeration misses or adds members."""
    missing = set(enum) - set(table)
    extra = set(table) - set(enum)
    if missing or extra:
        raise ContractViolation(
            f"{what} must cover exactly {enum.__name__}: "
            f"missing {sorted(m.value for m in missing)}, unexpected {sorted(map(str, extra))}"
        )
