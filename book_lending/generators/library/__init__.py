"""Library domain generators."""

from book_lending.generators.library.catalog import BookGenerator, UserGenerator

__all__ = ["BookGenerator", "UserGenerator"]
