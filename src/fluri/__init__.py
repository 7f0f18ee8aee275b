# -*- coding: utf-8 -*-
"""Fluri.

Fluri is a fluent URI mutation library built on top of yarl.

The library comes in two parts:
    * FluriMixin which can be mixed into any class dealing with URIs, such as request builders, to give it
      read/write access to each component of a held URI.
    * Fluri, a standalone URI type offering the same API which can be constructed from a string, a yarl.URL or
      another Fluri.
"""

from importlib.metadata import version, PackageNotFoundError
from typing import Tuple, cast

from .errors import FluriError, UriParseError, InvalidComponentError
from .uri import Fluri, FluriMixin, parse_uri

try:
    __version__: str = version("fluri")
except PackageNotFoundError:
    # Running from a source checkout without installing
    __version__: str = "0.0.0"
__version_info__: Tuple[str, str, str] = cast(Tuple[str, str, str], tuple(__version__.split('.')))

__all__ = [
    "Fluri",
    "FluriMixin",
    "FluriError",
    "InvalidComponentError",
    "UriParseError",
    "parse_uri",
]
