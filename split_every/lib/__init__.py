"""Split-every library modules.

This package contains the matchers, the two chunker families and the
configuration helpers built on top of them.
"""

from split_every.lib.api import (
    split_by_char,
    split_by_char_set,
    split_by_predicate,
    split_by_text,
    split_every,
    split_iterable,
    split_pull_source,
    split_pull_source_on_slice,
    split_sequence,
)
from split_every.lib.chunker import SplitEvery, check_count
from split_every.lib.config_loader import (
    SplitConfig,
    SplitMode,
    build_split_config_from_dict,
    build_splitter,
    load_split_config,
)
from split_every.lib.env import expand_config_values, expand_env_refs, load_env_file
from split_every.lib.errors import (
    ConfigurationError,
    InvalidCountError,
    InvalidPatternError,
    SourceEncodingError,
    SplitEveryError,
)
from split_every.lib.logging import JSONFormatter, setup_logging
from split_every.lib.matchers import (
    CharMatcher,
    CharSetMatcher,
    Matcher,
    PredicateMatcher,
    SubsequenceMatcher,
    TextMatcher,
    char_width,
    utf8_width,
)
from split_every.lib.pull import PullSplitEvery, PullSplitEveryOnSlice

__all__ = [
    # Entry points
    "split_by_char",
    "split_by_char_set",
    "split_by_predicate",
    "split_by_text",
    "split_every",
    "split_iterable",
    "split_pull_source",
    "split_pull_source_on_slice",
    "split_sequence",
    # Chunkers
    "SplitEvery",
    "PullSplitEvery",
    "PullSplitEveryOnSlice",
    "check_count",
    # Matchers
    "Matcher",
    "TextMatcher",
    "CharMatcher",
    "CharSetMatcher",
    "PredicateMatcher",
    "SubsequenceMatcher",
    "char_width",
    "utf8_width",
    # Configuration
    "SplitConfig",
    "SplitMode",
    "build_split_config_from_dict",
    "build_splitter",
    "load_split_config",
    "expand_env_refs",
    "expand_config_values",
    "load_env_file",
    # Errors
    "SplitEveryError",
    "InvalidCountError",
    "InvalidPatternError",
    "SourceEncodingError",
    "ConfigurationError",
    # Logging
    "JSONFormatter",
    "setup_logging",
]
