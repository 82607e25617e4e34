"""Errors raised while loading or resolving catalog configuration."""


class ConfigurationError(Exception):
    """Raised for configuration-level problems.

    Unknown stages, empty or malformed catalogs and missing stage
    benchmarks are all fatal: initialization should abort.
    """
