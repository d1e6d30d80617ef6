"""Links workflow run artifacts from the pull requests that built them."""

__version__ = "0.1.0"
