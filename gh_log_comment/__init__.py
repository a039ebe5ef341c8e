"""Post Jenkins build logs as GitHub pull request comments."""

__version__ = "0.1.0"
