"""Concrete renderers; each supplies only the structural glue of its target."""

from .aoa import AoaFormatter
from .text import TextFormatter
from .org import OrgFormatter
from .term import TermFormatter
from .latex import LaTeXFormatter

__all__ = [
	'AoaFormatter',
	'TextFormatter',
	'OrgFormatter',
	'TermFormatter',
	'LaTeXFormatter',
]
