"""Insertive — named text snippets with numbered selection placeholders."""

from insertive.constants import VERSION

__version__ = VERSION
