"""Application Commands."""

from catalog.application.commands.resolve_categories_command import (
    ResolveCategoriesCommand,
)

__all__ = ["ResolveCategoriesCommand"]
