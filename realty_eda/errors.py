class LoadError(RuntimeError):
    """A source could not be read or does not match the sales schema."""


class ReshapeError(ValueError):
    """A wide/long reshape was given a table of the wrong shape."""


class FitError(ValueError):
    """A group cannot be fitted (too few rows or a constant predictor)."""
