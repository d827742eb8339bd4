# imageloader/imaging/classifier.py
"""
Maps a path, URL or data URI onto one of the supported Extension members.
"""

from imageloader.shared.constants import (
    BASE64_MARKER,
    DATA_URI_PREFIX,
    SUPPORTED_EXTENSIONS,
    Extension,
    MediaKind,
)
from imageloader.shared.errors import InvalidPathError, MissingExtensionError, UnsupportedExtensionError


def classify(identifier: str, kind: MediaKind = MediaKind.STILL) -> Extension:
    """
    Returns the Extension for `identifier`, checked against the formats `kind` supports.

    Matching is case-insensitive. Query strings and fragments are ignored, so
    "a/b/sample.PNG?x=1" classifies as PNG.

    Raises:
        InvalidPathError: blank identifier or a data URI without a ';base64' header.
        MissingExtensionError: no characters after the final '.' (or no '.' at all).
        UnsupportedExtensionError: extension outside the set supported by `kind`.
    """
    if not identifier or identifier.isspace():
        raise InvalidPathError("Path cannot be blank")

    if identifier.startswith(DATA_URI_PREFIX):
        return classify_data_uri(identifier, kind)

    return _check_kind(Extension.from_string(extract_suffix(identifier)), kind)


def classify_data_uri(uri: str, kind: MediaKind = MediaKind.STILL) -> Extension:
    """Classifies the MIME subtype of a 'data:image/<subtype>;base64,<payload>' URI."""
    header, sep, _ = uri.partition(",")
    if not sep or BASE64_MARKER not in header:
        raise InvalidPathError(f"Malformed data URI, expected 'data:image/<type>;base64,<payload>': {uri[:64]}")

    subtype = header[len(DATA_URI_PREFIX) :].split(";", 1)[0].strip()
    if not subtype:
        raise MissingExtensionError(uri[:64])

    return _check_kind(Extension.from_string(subtype), kind)


def extract_suffix(path: str) -> str:
    """Returns the raw text after the final '.' of the last path segment."""
    # Drop query string and fragment, then look at the file name only
    stripped = path.split("?", 1)[0].split("#", 1)[0]
    file_name = stripped.replace("\\", "/").rsplit("/", 1)[-1]

    # A name with no "." at all is treated like one ending in "."
    if "." not in file_name or file_name.endswith("."):
        raise MissingExtensionError(path)

    return file_name.rsplit(".", 1)[1]


def _check_kind(extension: Extension, kind: MediaKind) -> Extension:
    if extension not in SUPPORTED_EXTENSIONS[kind]:
        raise UnsupportedExtensionError(
            extension.suffix,
            f"Unsupported image extension for {kind.value} media: {extension.suffix}",
        )
    return extension
