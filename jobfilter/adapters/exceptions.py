"""Custom exceptions for ATS adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    Catching this exception will catch any adapter-related error that should
    be handled by the caller (e.g. skip the file and continue with the next).
    """

    pass


class AdapterResponseError(AdapterError):
    """Response shape is unusable.

    Indicates the adapter was handed a payload it cannot extract postings
    from (e.g. not a list or object, 'jobs' not an array).
    """

    pass


class AdapterConfigurationError(AdapterError):
    """Invalid adapter configuration.

    Indicates the adapter was requested for an unsupported ATS type.
    """

    pass
