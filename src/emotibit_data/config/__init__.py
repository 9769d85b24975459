"""Configuration objects and helpers for emotibit_data.

Parsing behaviour (token stripping, TX sub-typing, batch worker count) is
captured in :class:`~emotibit_data.config.runtime.ParserConfig`, which can be
built from a mapping or loaded from a YAML file such as::

    parser:
      strip_tokens: false
      workers: 4
"""

from .runtime import ParserConfig, config_from_mapping, load_config

__all__ = ["ParserConfig", "config_from_mapping", "load_config"]
