import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from multidict import MultiDict, MultiDictProxy
from yarl import URL

from .errors import InvalidComponentError, UriParseError

logger = logging.getLogger(__name__)

EMPTY_URI: URL = URL("")

QueryParameters = Union[Mapping[str, Union[str, int, float]], None]


def _text(value: Optional[str]) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return value


def _encode_path(path: str) -> str:
    return URL.build(path=path).raw_path


def _authority(uri: URL, **changes: Any) -> str:
    parts = dict(
        scheme=uri.scheme,
        user=uri.user,
        password=uri.password,
        host=uri.host or "",
        port=uri.explicit_port,
    )
    parts.update(changes)
    return URL.build(**parts).raw_authority


def _rebuild(uri: URL, **changes: str) -> URL:
    """
    Copy the given URL, replacing the given encoded components.

    :param uri: The URL to copy.
    :param changes: Encoded replacements for any of scheme, authority, path, query_string and fragment.
    :return: A new URL.
    """
    parts = dict(
        scheme=uri.scheme,
        authority=uri.raw_authority,
        path=uri.raw_path,
        query_string=uri.raw_query_string,
        fragment=uri.raw_fragment,
    )
    parts.update(changes)
    # a path following an authority must be absolute
    if parts["authority"] and parts["path"] and not parts["path"].startswith("/"):
        parts["path"] = "/" + parts["path"]
    return URL.build(encoded=True, **parts)


def _join_segments(uri: URL, segments: Iterable[str]) -> str:
    if isinstance(segments, str):
        raise TypeError("path segments must be an iterable of str, not a str")
    path = "/".join(_encode_path(_text(segment)).replace("/", "%2F") for segment in segments)
    if uri.raw_path.startswith("/"):
        path = "/" + path
    return path


class FluriMixin:
    """
    A fluent URI mutation API built on top of yarl.URL.

    Mix into any class which deals with URI based actions, i.e. HTTP requests or websocket connections:

        class Request(FluriMixin):
            pass

        req = Request()
        req.scheme = "https"
        req.host = "example.com"
        req.add_path_segment("users").set_query_param("limit", "10")

    The held URL is immutable so every write replaces it with a new URL differing in a single component.
    """

    _uri: URL = EMPTY_URI

    def _replace(self, component: str, value: Any, build: Callable[[URL], URL]) -> None:
        try:
            uri = build(self._uri)
        except (TypeError, ValueError) as err:
            raise InvalidComponentError(component, value, str(err)) from err
        logger.debug("Set %s to %r: %s", component, value, uri)
        self._uri = uri

    @property
    def uri(self) -> URL:
        """
        The full URI. All other properties read from and replace this value.
        """
        return self._uri

    @uri.setter
    def uri(self, uri: Union[str, URL, "FluriMixin", None]) -> None:
        self._uri = parse_uri(uri)
        logger.debug("Set uri to %r: %s", uri, self._uri)

    @property
    def scheme(self) -> str:
        """
        The URI scheme or protocol, i.e. http, https, ws.
        """
        return self._uri.scheme

    @scheme.setter
    def scheme(self, scheme: Optional[str]) -> None:
        self._replace("scheme", scheme, lambda uri: _rebuild(uri, scheme=_text(scheme).lower()))

    @property
    def host(self) -> str:
        """
        The URI host, including sub-domains and the tld.
        """
        return self._uri.host or ""

    @host.setter
    def host(self, host: Optional[str]) -> None:
        self._replace("host", host, lambda uri: _rebuild(uri, authority=_authority(uri, host=_text(host))))

    @property
    def port(self) -> Optional[int]:
        """
        The URI port, falling back to the default port of the scheme when none is given.
        """
        return self._uri.port

    @port.setter
    def port(self, port: Optional[int]) -> None:
        self._replace("port", port, lambda uri: uri.with_port(port))

    @property
    def path(self) -> str:
        return self._uri.path

    @path.setter
    def path(self, path: Optional[str]) -> None:
        self._replace("path", path, lambda uri: _rebuild(uri, path=_encode_path(_text(path))))

    @property
    def path_segments(self) -> Tuple[str, ...]:
        """
        The decoded path segments, without the leading "/" of absolute paths.
        """
        parts = self._uri.parts
        if parts[:1] == ("/",):
            parts = parts[1:]
        return () if parts == ("",) else tuple(parts)

    @path_segments.setter
    def path_segments(self, segments: Iterable[str]) -> None:
        self._replace("path segments", segments, lambda uri: _rebuild(uri, path=_join_segments(uri, segments)))

    @property
    def query(self) -> str:
        return self._uri.query_string

    @query.setter
    def query(self, query: Optional[str]) -> None:
        self._replace(
            "query",
            query,
            lambda uri: _rebuild(uri, query_string=URL.build(query_string=_text(query)).raw_query_string),
        )

    @property
    def query_parameters(self) -> "MultiDictProxy[str]":
        return self._uri.query

    @query_parameters.setter
    def query_parameters(self, query_parameters: QueryParameters) -> None:
        self._replace(
            "query parameters",
            query_parameters,
            lambda uri: _rebuild(uri, query_string=URL.build(query=query_parameters).raw_query_string),
        )

    @property
    def fragment(self) -> str:
        """
        The URI fragment or hash.
        """
        return self._uri.fragment

    @fragment.setter
    def fragment(self, fragment: Optional[str]) -> None:
        self._replace(
            "fragment", fragment, lambda uri: _rebuild(uri, fragment=URL.build(fragment=_text(fragment)).raw_fragment)
        )

    def append_to_path(self, value: str) -> "FluriMixin":
        """
        Append the given string to the path as is.

        No separator is added, so add_path_segment should be used unless the value already contains the
        required slashes.

        :param value: The string to append.
        :return: self
        """
        def append(uri: URL) -> URL:
            path = uri.raw_path
            # yarl reports an empty path as "/" once an authority is present
            if path == "/" and uri.raw_authority:
                path = ""
            return _rebuild(uri, path=path + _encode_path(_text(value)))

        self._replace("path", value, append)
        return self

    def add_path_segment(self, segment: str) -> "FluriMixin":
        """
        Append a single segment to the path. Slashes in the segment are escaped.

        :param segment: The path segment to add.
        :return: self
        """
        self.path_segments = self.path_segments + (segment,)
        return self

    def set_query_param(self, name: str, value: Union[str, int, float]) -> "FluriMixin":
        return self.update_query({name: value})

    def update_query(self, query_parameters: Mapping[str, Union[str, int, float]]) -> "FluriMixin":
        """
        Update the URI query parameters, merging the given mapping with the current query parameters instead
        of overwriting them.

        :param query_parameters: The parameters to set. Neither this mapping nor the current parameters are
            modified.
        :return: self
        """
        def merge(uri: URL) -> URL:
            merged = MultiDict(uri.query)
            merged.update(query_parameters)
            return _rebuild(uri, query_string=URL.build(query=merged).raw_query_string)

        self._replace("query parameters", query_parameters, merge)
        return self


class Fluri(FluriMixin):
    """
    A standalone fluent URI, usable as a mutable replacement for yarl.URL.

        uri = Fluri()
        uri.host = "example.com"
        uri.scheme = "https"
        uri.path = "path/to/resource"
        uri.query_parameters = {"limit": "10", "format": "json"}
        str(uri)  # https://example.com/path/to/resource?limit=10&format=json
    """

    def __init__(self, uri: Union[str, URL, FluriMixin, None] = None) -> None:
        """
        Create a Fluri by parsing a URI string or copying from an existing URI.

        :param uri: A URI string, a yarl.URL, another Fluri to copy from or None for the empty URI.
        """
        self.uri = uri

    def __str__(self) -> str:
        return str(self._uri)

    def __repr__(self) -> str:
        return f"Fluri({str(self)!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FluriMixin):
            return self._uri == other.uri
        if isinstance(other, URL):
            return self._uri == other
        return NotImplemented


def parse_uri(uri: Union[str, URL, FluriMixin, None]) -> URL:
    """
    Convert the given value into a URL, using the empty URI for None.

    :param uri: A URI string, a yarl.URL, a FluriMixin or None.
    :return: The URL value.
    """
    if uri is None:
        return EMPTY_URI
    if isinstance(uri, FluriMixin):
        return uri.uri
    if isinstance(uri, URL):
        return uri
    if isinstance(uri, str):
        try:
            return URL(uri)
        except ValueError as err:
            raise UriParseError(uri, str(err)) from err
    raise TypeError(f"Cannot create a URI from {type(uri).__name__}.")
