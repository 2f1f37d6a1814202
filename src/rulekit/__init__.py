"""RuleKit: aggregate rule and mode definitions into agent artifacts."""

__version__ = "0.1.0"
__author__ = "RuleKit Contributors"
__description__ = "Aggregate rule and mode definitions into agent artifacts"

from .frontmatter import parse_front_matter
from .loaders import ModeLoader, RuleLoader
from .models import AggregateOutput, BuildConfig, Mode, RuleDocument
from .pipeline import build
from .writer import OutputWriter

__all__ = [
    "AggregateOutput",
    "BuildConfig",
    "Mode",
    "ModeLoader",
    "OutputWriter",
    "RuleDocument",
    "RuleLoader",
    "build",
    "parse_front_matter",
]
