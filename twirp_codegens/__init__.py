"""twirp-codegens - protoc plugins generating middleware for Twirp services."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("twirp-codegens")
except PackageNotFoundError:
    __version__ = "(local)"
