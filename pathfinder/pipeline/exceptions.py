"""Pipeline exceptions."""


class PipelineError(Exception):
    """Raised when a match run fails for a reason other than a scoring or storage error."""

    pass
